from pathlib import Path

import pytest

from main import format_path, main


DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def test_format_path() -> None:
    assert format_path(["u", "x", "y", "v"]) == "[u, x, y, v]"


def test_main_prints_distance_and_path(capsys: pytest.CaptureFixture) -> None:
    exit_code = main([str(DATA_DIR / "sample_graph.txt")])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.splitlines() == ["Beginning analysis", "", "5", "[u, x, y, v]", "", "Done"]


def test_main_uses_command_line_source_and_target(capsys: pytest.CaptureFixture) -> None:
    exit_code = main([str(DATA_DIR / "sample_graph.yaml"), "--source", "v", "--target", "x"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "3\n[v, y, x]" in out


def test_main_all_prints_table(capsys: pytest.CaptureFixture) -> None:
    main([str(DATA_DIR / "sample_graph.yaml"), "--all"])

    out = capsys.readouterr().out
    assert "=== Distances from u ===" in out
    assert "  y: 3  [u, x, y]" in out
    assert "  z: no path" in out


def test_main_unreachable_target(capsys: pytest.CaptureFixture) -> None:
    exit_code = main([str(DATA_DIR / "sample_graph.yaml"), "--target", "z"])

    assert exit_code == 1
    assert "No path between u and z." in capsys.readouterr().out


def test_main_prompts_for_missing_path(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr("builtins.input", lambda: str(DATA_DIR / "sample_graph.txt"))

    assert main([]) == 0
    assert "[u, x, y, v]" in capsys.readouterr().out


@pytest.mark.parametrize(
    "argv",
    [
        ["does-not-exist.txt"],
        [str(DATA_DIR / "sample_graph.txt"), "--source", "q"],
        [str(DATA_DIR / "sample_graph.txt"), "--target", "q"],
    ],
)
def test_main_reports_bad_input(argv) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_main_reports_parse_errors(tmp_path: Path) -> None:
    path = tmp_path / "broken.txt"
    path.write_text("ux, uy\n1\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 2


def test_main_static_out(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    output = tmp_path / "tree.png"

    main([str(DATA_DIR / "sample_graph.txt"), "--static-out", str(output)])

    assert output.exists()
    assert f"Visualisation stored at: {output}" in capsys.readouterr().out


def test_main_empty_prompt_answer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("builtins.input", lambda: "   ")

    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


@pytest.mark.parametrize(
    "name, content",
    [
        ("broken.yaml", b"graph: [nodes: {\n"),
        ("empty.yaml", b"graph:\n  nodes:\n  edges:\n"),
        ("infinite.yaml", b"graph:\n  nodes: [u, v]\n  edges:\n    - [u, v, .inf]\n"),
        ("latin1.txt", b"\xff\xfe, ux\n1, 2\n"),
    ],
)
def test_main_reports_unreadable_files(tmp_path: Path, name: str, content: bytes) -> None:
    path = tmp_path / name
    path.write_bytes(content)

    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 2


def test_main_reports_directory(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path)])
    assert excinfo.value.code == 2


def test_main_numeric_yaml_labels(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    path = tmp_path / "numeric.yaml"
    path.write_text(
        "graph:\n  nodes: [1, 2, 3]\n  edges:\n    - [1, 2, 4]\n    - [2, 3, 1]\n"
        "routing:\n  start_node: 1\n  end_node: 3\n",
        encoding="utf-8",
    )

    assert main([str(path)]) == 0
    assert "5\n[1, 2, 3]" in capsys.readouterr().out
