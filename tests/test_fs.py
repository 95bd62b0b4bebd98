from pathlib import Path

import pytest

from codeagent.fs import find_file, get_current_working_directory, read_file, write_file


def test_current_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = get_current_working_directory()
    assert Path(result).resolve() == tmp_path.resolve()


def test_find_file_nested_case_insensitive(tmp_path):
    target = tmp_path / "pkg" / "sub" / "Main.GO"
    target.parent.mkdir(parents=True)
    target.write_text("package main")
    assert find_file("main.go", tmp_path) == str(target)


def test_find_file_later_directory_wins(tmp_path):
    for name in ("a", "b"):
        (tmp_path / name).mkdir()
        (tmp_path / name / "target.txt").write_text(name)
    assert find_file("target.txt", tmp_path) == str(tmp_path / "b" / "target.txt")


def test_find_file_first_match_in_directory(tmp_path):
    (tmp_path / "TARGET.txt").write_text("upper")
    (tmp_path / "target.txt").write_text("lower")
    found = find_file("target.txt", tmp_path)
    assert found == str(tmp_path / "TARGET.txt")


def test_find_file_ignores_directories_with_name(tmp_path):
    (tmp_path / "main.go").mkdir()
    with pytest.raises(FileNotFoundError, match="file not found: main.go"):
        find_file("main.go", tmp_path)


def test_find_file_root_is_matching_file(tmp_path):
    path = tmp_path / "solo.py"
    path.write_text("")
    assert find_file("SOLO.py", path) == str(path)


def test_find_file_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        find_file("x.go", tmp_path / "nowhere")


def test_write_then_read_round_trip(tmp_path):
    path = tmp_path / "code.py"
    write_file(path, b"print('hi')\n")
    assert read_file(path) == b"print('hi')\n"


def test_write_str_is_utf8(tmp_path):
    path = tmp_path / "name.txt"
    write_file(path, "José")
    assert read_file(path).decode("utf-8") == "José"


def test_write_truncates(tmp_path):
    path = tmp_path / "f.txt"
    write_file(path, b"long content")
    write_file(path, b"short")
    assert read_file(path) == b"short"


def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="failed to read file"):
        read_file(tmp_path / "missing.txt")


def test_write_into_missing_directory(tmp_path):
    with pytest.raises(OSError, match="failed to write file"):
        write_file(tmp_path / "no" / "such" / "file.txt", b"x")