import pytest

from csvtoolbelt.csvio import read_rows, write_rows
from csvtoolbelt.splitter import main, render_filename, split_csv

ROWS = [["h1", "h2"]] + [[str(i), f"v{i}"] for i in range(5)]


def test_render_filename_default_template():
    assert render_filename("{}.csv", "0") == "0.csv"


def test_render_filename_sanitizes_value():
    name = render_filename("part-{}.csv", "a/b c")
    assert "/" not in name and " " not in name
    assert name.startswith("part-") and name.endswith(".csv")


@pytest.mark.parametrize("template", ["plain.csv", "{}-{}.csv"])
def test_render_filename_needs_one_placeholder(template):
    with pytest.raises(ValueError, match="must contain one"):
        render_filename(template, "0")


def test_split_names_files_by_first_record(tmp_path):
    paths = split_csv(ROWS, tmp_path, size=2)
    assert [p.name for p in paths] == ["0.csv", "2.csv", "4.csv"]


def test_split_chunks_reassemble_records(tmp_path):
    paths = split_csv(ROWS, tmp_path, size=2)
    chunks = [read_rows(str(p)) for p in paths]
    assert all(chunk[0] == ROWS[0] for chunk in chunks)
    assert all(len(chunk) - 1 <= 2 for chunk in chunks)
    assert [r for chunk in chunks for r in chunk[1:]] == ROWS[1:]


def test_split_pads_names(tmp_path):
    paths = split_csv(ROWS, tmp_path, size=10, pad=3)
    assert [p.name for p in paths] == ["000.csv"]


def test_split_no_headers(tmp_path):
    paths = split_csv(ROWS, tmp_path, size=3, no_headers=True)
    chunks = [read_rows(str(p)) for p in paths]
    assert [r for chunk in chunks for r in chunk] == ROWS


def test_split_only_header_writes_one_file(tmp_path):
    paths = split_csv([ROWS[0]], tmp_path, size=2)
    assert len(paths) == 1
    assert read_rows(str(paths[0])) == [ROWS[0]]


def test_split_zero_size_raises(tmp_path):
    with pytest.raises(ValueError, match="greater than 0"):
        split_csv(ROWS, tmp_path, size=0)


def test_split_creates_outdir(tmp_path):
    outdir = tmp_path / "nested" / "out"
    paths = split_csv(ROWS, outdir, size=5)
    assert outdir.is_dir()
    assert read_rows(str(paths[0])) == ROWS


def test_main_splits_file(tmp_path):
    infile = tmp_path / "in.csv"
    outdir = tmp_path / "chunks"
    write_rows(ROWS, str(infile))
    assert main([str(outdir), str(infile), "-s", "4", "--filename", "c{}.csv"]) == 0
    assert sorted(p.name for p in outdir.iterdir()) == ["c0.csv", "c4.csv"]
    assert read_rows(str(outdir / "c4.csv")) == [ROWS[0], ROWS[5]]