from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from svp_importer.api import import_svp
from svp_importer.svp import SvpImportError
from svp_importer.ustx import ProjectValidationError
from svp_importer.utils.logging_utils import attach_context_filter, build_formatter, configure_logging


def _format_summary(summary: Dict[str, Any]) -> str:
    lines = [f"Project: {summary['name']}"]
    for sig in summary["time_signatures"]:
        lines.append(f"  Time signature: {sig['beat_per_bar']}/{sig['beat_unit']} at bar {sig['bar_position']}")
    for tempo in summary["tempos"]:
        lines.append(f"  Tempo: {tempo['bpm']} BPM at tick {tempo['position']}")
    for track in summary["tracks"]:
        muted = " (muted)" if track["muted"] else ""
        lines.append(f"  Track {track['track_no']}: {track['name']}{muted}")
        for part in summary["parts"]:
            if part["track_no"] != track["track_no"]:
                continue
            curves = ", ".join(f"{abbr}={count}" for abbr, count in part["curves"].items())
            lines.append(
                f"    Part {part['name']!r}: position={part['position']} "
                f"duration={part['duration']} notes={len(part['notes'])}"
                + (f" curves[{curves}]" if curves else "")
            )
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Import a Synthesizer V (.svp) project.")
    parser.add_argument("file", help="Path to the .svp file.")
    parser.add_argument("--json", action="store_true", help="Print the project summary as JSON.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--log-dir", default=None, help="Also write logs to this directory.")
    args = parser.parse_args(argv)
    configure_logging()
    root = logging.getLogger()
    if args.debug:
        root.setLevel(logging.DEBUG)
    if args.log_dir:
        log_dir = Path(args.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_dir / "svp_import.log", encoding="utf-8")
        handler.setFormatter(build_formatter())
        attach_context_filter(handler)
        root.addHandler(handler)

    path = Path(args.file)
    if path.suffix.lower() != ".svp":
        logging.getLogger(__name__).warning("File does not have an .svp extension: %s", path)
    try:
        summary = import_svp(path)
    except SvpImportError as exc:
        sys.stdout.write(json.dumps({"error": exc.to_payload()}) + "\n")
        return 1
    except ProjectValidationError as exc:
        sys.stdout.write(
            json.dumps({"error": {"error_type": type(exc).__name__, "detail": str(exc)}}) + "\n"
        )
        return 1

    if args.json:
        sys.stdout.write(json.dumps(summary, ensure_ascii=False) + "\n")
    else:
        sys.stdout.write(_format_summary(summary) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
