import pytest

from csvtoolbelt.csvio import read_rows, write_rows


def test_round_trip(tmp_path):
    rows = [["h1", "h2"], ["a,b", 'say "hi"'], ["", "x"]]
    path = str(tmp_path / "data.csv")
    write_rows(rows, path)
    assert read_rows(path) == rows


def test_round_trip_custom_delimiter(tmp_path):
    rows = [["a;b", "c"], ["1", "2"]]
    path = str(tmp_path / "data.csv")
    write_rows(rows, path, ";")
    assert read_rows(path, ";") == rows


def test_written_bytes(tmp_path):
    path = tmp_path / "data.csv"
    write_rows([["a", "b"], ["1", "2"]], str(path))
    assert path.read_text() == "a,b\n1,2\n"


def test_bad_delimiter(tmp_path):
    with pytest.raises(ValueError):
        write_rows([["a"]], str(tmp_path / "x.csv"), ";;")


def test_stdout(capsys):
    write_rows([["x", "y"]])
    assert capsys.readouterr().out == "x,y\n"