import pytest

from asrfront.seg_dict import SegDict


@pytest.fixture
def dict_file(tmp_path):
    path = tmp_path / "seg_dict"
    path.write_text(
        "hello\the@@ llo\n"
        "world\twor@@ ld\n"
        "no_tab_line\n"
        "single\tsingle\n",
        encoding="utf-8",
    )
    return path


def test_from_file_reads_entries(dict_file):
    seg = SegDict.from_file(dict_file)
    assert seg.tokens("hello") == ["he@@", "llo"]
    assert seg.tokens("world") == ["wor@@", "ld"]
    assert seg.tokens("single") == ["single"]


def test_lines_without_tab_are_skipped(dict_file):
    seg = SegDict.from_file(dict_file)
    assert seg.tokens("no_tab_line") == []


def test_unknown_word_gives_empty_list():
    seg = SegDict({"a": ["a"]})
    assert seg.tokens("zzz") == []


def test_later_entry_replaces_earlier(tmp_path):
    path = tmp_path / "dup"
    path.write_text("w\tx y\nw\tz\n", encoding="utf-8")
    seg = SegDict.from_file(path)
    assert seg.tokens("w") == ["z"]


def test_windows_line_endings(tmp_path):
    path = tmp_path / "crlf"
    path.write_bytes(b"w\tx y\r\n")
    seg = SegDict.from_file(path)
    assert seg.tokens("w") == ["x", "y"]


def test_returned_tokens_are_a_copy():
    tokens = ["a", "b"]
    seg = SegDict({"ab": tokens})
    result = seg.tokens("ab")
    result.append("c")
    tokens.append("d")
    assert seg.tokens("ab") == ["a", "b"]


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        SegDict.from_file(tmp_path / "absent")