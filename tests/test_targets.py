import pytest

from takeover.exceptions import TargetLoadError
from takeover.targets import load_targets, read_targets, split_targets


def test_split_targets_trims_and_keeps_duplicates():
    assert split_targets(" a.example.com, ,b.example.com,a.example.com ") == [
        "a.example.com", "b.example.com", "a.example.com",
    ]


def test_read_targets(tmp_path):
    path = tmp_path / "targets.txt"
    path.write_text("one.example.com\n\n  two.example.com  \r\nhttps://three.example.com\n")
    assert read_targets(str(path)) == ["one.example.com", "two.example.com", "https://three.example.com"]


def test_unreadable_file(tmp_path):
    with pytest.raises(TargetLoadError):
        read_targets(str(tmp_path / "nope.txt"))


def test_load_targets_prefers_argument(tmp_path):
    path = tmp_path / "targets.txt"
    path.write_text("file.example.com\n")
    assert load_targets(target="arg.example.com", targets_file=str(path)) == ["arg.example.com"]
    assert load_targets(targets_file=str(path)) == ["file.example.com"]


def test_load_targets_requires_a_source():
    with pytest.raises(TargetLoadError):
        load_targets()


def test_empty_list_is_fatal(tmp_path):
    path = tmp_path / "targets.txt"
    path.write_text("\n   \n")
    with pytest.raises(TargetLoadError):
        load_targets(targets_file=str(path))
    with pytest.raises(TargetLoadError):
        load_targets(target=" , ")
