"""CLI integration tests."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from reslocator.cli import main

RESOURCES = Path(__file__).parent / "resources"


def _render_help(capsys: pytest.CaptureFixture[str]) -> str:
    """Run `reslocator --help` via CLI entrypoint and return captured stdout."""
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    return capsys.readouterr().out


def _lines(capsys: pytest.CaptureFixture[str]) -> list[str]:
    return [line for line in capsys.readouterr().out.split("\n") if line]


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run each test from an empty directory so no stray config file is picked up."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


def test_help_includes_tagline_and_usage(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "reslocator: Find resources in directories and archives by glob pattern" in out
    assert "Common usage:" in out
    assert "reslocator --root resources 'books/*.properties'" in out


def test_list_matches(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--root", str(RESOURCES), "books/*.properties"]) == 0
    assert _lines(capsys) == [
        "books/a_clash_of_kings.properties",
        "books/a_game_of_thrones.properties",
    ]


def test_multiple_patterns_union_in_index_order(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-r", str(RESOURCES), "**.properties", "books/README.md", "**game**"]) == 0
    assert _lines(capsys) == [
        "books/README.md",
        "books/a_clash_of_kings.properties",
        "books/a_game_of_thrones.properties",
    ]


def test_regex_query(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-r", str(RESOURCES), "--regex", r".*_of_kings\..*"]) == 0
    assert _lines(capsys) == ["books/a_clash_of_kings.properties"]


def test_uri_output(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-r", str(RESOURCES), "--uri", "books/README.md"]) == 0
    (line,) = _lines(capsys)
    assert line.startswith("file://")
    assert line.endswith("/books/README.md")


def test_property_output(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-r", str(RESOURCES), "--property", "title", "books/*.properties"]) == 0
    assert _lines(capsys) == [
        "books/a_clash_of_kings.properties\tA Clash of Kings",
        "books/a_game_of_thrones.properties\tA Game of Thrones",
    ]


def test_cat_archive_entries(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    archive = tmp_path / "data.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("notes/a.txt", "alpha\n")
        zf.writestr("notes/b.txt", "beta\n")
        zf.writestr("other.txt", "skip\n")
    assert main(["-r", str(archive), "--cat", "notes/*"]) == 0
    assert _lines(capsys) == ["alpha", "beta"]


def test_output_file(tmp_path: Path) -> None:
    out = tmp_path / "out" / "matches.txt"
    assert main(["-r", str(RESOURCES), "-o", str(out), "books/*.md"]) == 0
    assert out.read_text() == "books/README.md\n"


def test_missing_roots_is_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["**"]) == 1
    assert "No roots specified" in capsys.readouterr().err


def test_missing_pattern_is_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-r", str(RESOURCES)]) == 1
    assert "at least one pattern" in capsys.readouterr().err


def test_invalid_root_is_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-r", str(tmp_path / "missing"), "**"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_glob_syntax_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-r", str(RESOURCES), "books/{a,{b}}"]) == 1
    assert "Cannot nest groups" in capsys.readouterr().err


def test_load_error_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = tmp_path / "root"
    root.mkdir()
    (root / "bad.properties").write_text("a=\\u00zz\n")
    assert main(["-r", str(root), "--property", "a", "*.properties"]) == 2
    assert "Could not load" in capsys.readouterr().err


def test_roots_from_config_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    project = tmp_path / "project"
    (project / "res").mkdir(parents=True)
    (project / "res" / "a.txt").write_text("a")
    (project / "res" / "b.log").write_text("b")
    (project / "reslocator.toml").write_text('roots = ["res"]\nextend-exclude = ["*.log"]\n')
    monkeypatch.chdir(project)
    assert main(["*"]) == 0
    assert _lines(capsys) == ["a.txt"]


def test_cli_roots_override_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    project = tmp_path / "project"
    project.mkdir()
    (project / "reslocator.toml").write_text('roots = ["does-not-exist"]\n')
    monkeypatch.chdir(project)
    assert main(["-r", str(RESOURCES), "books/README.md"]) == 0
    assert _lines(capsys) == ["books/README.md"]


def test_badly_typed_config_is_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    project = tmp_path / "project"
    (project / "res").mkdir(parents=True)
    (project / "reslocator.toml").write_text('roots = "res"\n')
    monkeypatch.chdir(project)
    assert main(["*"]) == 1
    err = capsys.readouterr().err
    assert "Invalid config file" in err
    assert "list of strings" in err
