"""
SVP Importer API Module

This module exposes the public APIs for importing Synthesizer V projects.
"""

from svp_importer.api.project import import_svp, summarize_project
from svp_importer.svp import load_svp

__all__ = [
    "import_svp",
    "load_svp",
    "summarize_project",
]
