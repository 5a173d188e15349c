"""
Command-line front end: generation subcommands, export verification, analysis.
"""
import json

from orbital_shift.app.main import build_parser, main


def test_tutorial_prints_puzzle(capsys):
    assert main(["tutorial", "0"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data["centers"]) == 1
    assert data["blackHexagons"] == []


def test_free_with_seed_is_reproducible(capsys):
    assert main(["free", "-d", "easy", "--seed", "5"]) == 0
    first = capsys.readouterr().out
    assert main(["free", "--difficulty", "easy", "--seed", "5"]) == 0
    assert capsys.readouterr().out == first


def test_daily_solution_export_verifies(tmp_path, capsys):
    path = tmp_path / "daily.json"
    assert main(["daily", "2026-10-19", "--solution", "-o", str(path)]) == 0

    data = json.loads(path.read_text())
    assert data["difficulty"] == "extreme"
    assert set(data["solution"]) == {"blackHexagons", "values", "rotations"}

    assert main(["verify", str(path)]) == 0
    out = capsys.readouterr().out
    assert "VALID" in out
    assert "INVALID" not in out


def test_verify_detects_wrong_digits(tmp_path, capsys):
    path = tmp_path / "puzzle.json"
    assert main(["tutorial", "1", "--solution", "-o", str(path)]) == 0

    data = json.loads(path.read_text())
    values = data["solution"]["values"]
    first = sorted(values)[0]
    values[first] = (values[first] + 1) % 10
    path.write_text(json.dumps(data))

    assert main(["verify", str(path)]) == 1
    assert "INVALID" in capsys.readouterr().out


def test_verify_requires_solution_export(tmp_path):
    path = tmp_path / "plain.json"
    assert main(["tutorial", "0", "-o", str(path)]) == 0
    assert main(["verify", str(path)]) == 2


def test_analyze(capsys):
    assert main(["analyze"]) == 0
    assert "Target bands exclusive: yes" in capsys.readouterr().out


def test_bad_tutorial_step_exits_with_error(capsys):
    assert main(["tutorial", "7"]) == 2
    assert "Error" in capsys.readouterr().err


def test_parser_lists_tiers():
    args = build_parser().parse_args(["free", "-d", "insane"])
    assert args.difficulty == "insane"
    assert args.seed is None


def test_verify_detects_wrong_rotations(tmp_path, capsys):
    path = tmp_path / "puzzle.json"
    assert main(["tutorial", "2", "--solution", "-o", str(path)]) == 0

    data = json.loads(path.read_text())
    data["solution"]["rotations"] = []
    path.write_text(json.dumps(data))

    assert main(["verify", str(path)]) == 1
    assert "does not reach the solved layout" in capsys.readouterr().out


def test_verify_missing_file_exits_with_error(tmp_path, capsys):
    assert main(["verify", str(tmp_path / "missing.json")]) == 2
    assert "Error" in capsys.readouterr().err
