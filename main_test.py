from main import main


def test_runs_both_parts(tmp_path, capsys):
    path = tmp_path / "day9"
    path.write_text("104,42,99\n")
    assert main(["9", "--input", str(path)]) == 0
    out = capsys.readouterr().out
    assert out == "Day 9 part 1:\n42\nDay 9 part 2:\n42\n"


def test_single_part(tmp_path, capsys):
    path = tmp_path / "day2"
    path.write_text("1,0,0,0,99")
    assert main(["2", "--part", "1", "--input", str(path)]) == 0
    assert capsys.readouterr().out == "Day 2 part 1:\n2\n"


def test_reports_errors(tmp_path, capsys):
    path = tmp_path / "day5"
    path.write_text("3,0,98")
    assert main(["5", "--part", "1", "--input", str(path)]) == 1
    assert "UnknownOpCode" in capsys.readouterr().err
