import json

import pytest

from svp_importer.config import Settings
from svp_importer.svp import SvpNoPayloadError, SvpNoProjectError, SvpReadError
from svp_importer.svp.reader import (
    decode_blob,
    decode_blobs,
    find_title,
    read_svp_text,
    select_project,
    split_blobs,
)


def test_split_blobs_drops_blank_pieces():
    text = '{"version": 1}\0\0   \0{"version": 2}\0\0'
    assert split_blobs(text) == ['{"version": 1}', '{"version": 2}']


def test_split_blobs_without_terminator_keeps_whole_text():
    assert split_blobs('{"version": 3}') == ['{"version": 3}']


@pytest.mark.parametrize("text", ["", "\0\0", " \n\0\t\0"])
def test_split_blobs_without_payload_raises(text):
    with pytest.raises(SvpNoPayloadError) as excinfo:
        split_blobs(text, path="empty.svp")
    assert excinfo.value.path == "empty.svp"
    assert excinfo.value.to_payload()["error_type"] == "SvpNoPayloadError"


def test_decode_ignores_unknown_fields_and_nulls(svp_docs):
    doc = svp_docs.project(version=None, tracks=[svp_docs.track(name=None)])
    doc["unknownTopLevel"] = {"nested": [1, 2, 3]}
    doc["tracks"][0]["dispOrder"] = None
    doc["tracks"][0]["mainGroup"]["notes"] = [
        {"onset": 0, "duration": 10, "pitch": 64, "lyrics": None, "phonemes": None, "detune": 12}
    ]
    project = decode_blob(json.dumps(doc))
    assert project.version is None
    assert project.rank == 0
    track = project.tracks[0]
    assert track.name is None
    assert track.disp_order == 0
    assert track.main_group.notes[0].pitch == 64
    assert track.main_group.notes[0].lyrics is None
    assert project.render_config.sample_rate == 44100


def test_decode_blobs_skips_broken_blobs(svp_docs, caplog):
    good = json.dumps(svp_docs.project(version=5))
    blobs = ['{"version": 9, "tracks": ', "null", "[1, 2]", good]
    with caplog.at_level("DEBUG", logger="svp_importer.svp.reader"):
        projects = decode_blobs(blobs)
    assert len(projects) == 1
    assert projects[0].version == 5
    assert "skipping" in caplog.text


def test_decode_blobs_all_broken_raises():
    with pytest.raises(SvpNoProjectError) as excinfo:
        decode_blobs(["not json", '{"tracks": "nope"}'], path="broken.svp")
    assert excinfo.value.blob_count == 2
    assert "broken.svp" in str(excinfo.value)


def test_single_document_is_authoritative_regardless_of_version(svp_docs):
    for version in (None, 0, 7, 200):
        projects = decode_blobs([json.dumps(svp_docs.project(version=version))])
        assert select_project(projects) is projects[0]


def test_highest_version_wins_in_any_order(svp_docs):
    docs = []
    for version in (3, 150, 42):
        doc = svp_docs.project(version=version)
        doc["tracks"] = [svp_docs.track(name=f"v{version}")]
        docs.append(json.dumps(doc))
    for ordering in (docs, list(reversed(docs)), docs[1:] + docs[:1]):
        selected = select_project(decode_blobs(ordering))
        assert selected.version == 150
        assert selected.tracks[0].name == "v150"


def test_version_ties_resolve_to_first(svp_docs):
    first = svp_docs.project(version=None, tracks=[svp_docs.track(name="first")])
    second = svp_docs.project(version=0, tracks=[svp_docs.track(name="second")])
    selected = select_project(decode_blobs([json.dumps(first), json.dumps(second)]))
    assert selected.tracks[0].name == "first"


def test_find_title_uses_longest_blob_and_key_priority():
    short = json.dumps({"name": "Short"})
    longest = json.dumps({"title": "Title", "projectName": "Project Name", "padding": "x" * 50})
    assert find_title([short, longest]) == "Project Name"


def test_find_title_failures_return_none():
    assert find_title([]) is None
    assert find_title(['{"name": "ok"}', "{broken json that is clearly the longest"]) is None
    assert find_title(['["name", "list"]']) is None
    assert find_title(['{"name": 12, "title": ""}']) is None


def test_read_svp_text_accepts_bom(tmp_path):
    path = tmp_path / "bom.svp"
    path.write_bytes(b"\xef\xbb\xbf" + b'{"version": 1}\x00')
    assert read_svp_text(path) == '{"version": 1}\0'


def test_read_svp_text_missing_file(tmp_path):
    with pytest.raises(SvpReadError) as excinfo:
        read_svp_text(tmp_path / "missing.svp")
    assert "missing.svp" in excinfo.value.path
    assert excinfo.value.reason


def test_read_svp_text_rejects_undecodable_bytes(tmp_path):
    path = tmp_path / "binary.svp"
    path.write_bytes(b"\xff\xfe\x00\x80garbage")
    with pytest.raises(SvpReadError):
        read_svp_text(path)


def test_read_svp_text_enforces_size_limit(tmp_path):
    path = tmp_path / "big.svp"
    path.write_text("x" * 32, encoding="utf-8")
    settings = Settings(
        app_env="test",
        log_level=None,
        log_dir=None,
        log_json=False,
        text_encoding="utf-8",
        max_file_bytes=16,
    )
    with pytest.raises(SvpReadError) as excinfo:
        read_svp_text(path, settings=settings)
    assert "limit" in excinfo.value.reason


def test_decode_blobs_skips_deeply_nested_blob(svp_docs):
    nested = '{"tracks": ' + "[" * 200000 + "]" * 200000 + "}"
    projects = decode_blobs([nested, json.dumps(svp_docs.project(version=4))])
    assert [project.version for project in projects] == [4]


def test_decode_blobs_skips_oversized_integer(svp_docs):
    huge = '{"version": ' + "9" * 5000 + "}"
    projects = decode_blobs([json.dumps(svp_docs.project(version=4)), huge])
    assert [project.version for project in projects] == [4]


def test_find_title_survives_deeply_nested_longest_blob():
    nested = '{"name": "Deep", "x": ' + "[" * 200000 + "]" * 200000 + "}"
    assert find_title(['{"name": "Short"}', nested]) is None


def test_read_svp_text_keeps_crlf(tmp_path):
    path = tmp_path / "crlf.svp"
    path.write_bytes(b'{\r\n"version": 1\r\n}\x00')
    text = read_svp_text(path)
    assert text == '{\r\n"version": 1\r\n}\0'
    assert len(split_blobs(text)[0]) == 18
