import pytest

from csvtoolbelt.csvio import read_rows
from csvtoolbelt.stats import Stats, WhichStats, compute_stats, main, stat_headers

QUARTILE_FIELDS = ("lower_fence", "q1", "q2_median", "q3", "iqr", "upper_fence")


def field_value(field, rows, headers, nulls=False, dates=True):
    data = [[r] for r in rows]
    if headers:
        data.insert(0, ["header"])
    which = WhichStats(
        include_nulls=nulls,
        dates=dates,
        nullcount=field == "nullcount",
        median=field == "median",
        quartiles=field == "quartiles",
        cardinality=field == "cardinality",
        mode=field == "mode",
    )
    names, stats = compute_stats(data, no_headers=not headers, which=which)
    header_row = stat_headers(which)
    records = [dict(zip(header_row, [name, *stat.to_record()])) for name, stat in zip(names, stats)]
    record = records[0]
    if field == "quartiles":
        return ",".join(record[k] for k in QUARTILE_FIELDS)
    return record[field]


# (field, rows, expected, nulls, dates)
PREFIX_CASES = [
    ("type", ["a"], "String", False, True),
    ("type", ["1"], "Integer", False, True),
    ("type", ["1.2"], "Float", False, True),
    ("type", [""], "NULL", False, True),
    ("type", ["1968-06-27"], "Date", False, True),
    ("type", ["1968-06-27"], "String", False, False),
    ("type", ["1968-06-27 12:30:01"], "DateTime", False, True),
    ("type", ["1968-06-27 12:30:01"], "String", False, False),
    ("type", ["a", ""], "String", False, True),
    ("type", ["1", ""], "Integer", False, True),
    ("type", ["1.2", ""], "Float", False, True),
    ("type", ["June 27, 1968", ""], "Date", False, True),
    ("type", ["June 27, 1968", ""], "String", False, False),
    ("type", ["June 27, 1968 12:30:00 UTC", ""], "DateTime", False, True),
    ("type", ["June 27, 1968 12:30:00 UTC", ""], "String", False, False),
    ("type", ["", "a"], "String", False, True),
    ("type", ["", "1"], "Integer", False, True),
    ("type", ["", "1.2"], "Float", False, True),
    ("type", ["", "September 17, 2012 at 10:09am PST"], "Date", False, True),
    ("type", ["", "September 17, 2012 at 10:09am PST"], "String", False, False),
    ("type", ["September 11, 2001", "September 17, 2012 at 10:09am PST"], "DateTime", False, True),
    ("type", ["September 11, 2001", "September 17, 2012 at 10:09am PST"], "String", False, False),
    ("type", ["1", "a"], "String", False, True),
    ("type", ["a", "1"], "String", False, True),
    ("type", ["1", "1.2"], "Float", False, True),
    ("type", ["1.2", "1"], "Float", False, True),
    ("type", ["", "1", "1.2", "a"], "String", False, True),
    ("type", ["1968-06-27", "abcde"], "String", False, True),
    ("type", ["wxyz", "1968-06-27"], "String", False, True),
    ("quartiles", ["a"], ",,,,,", False, True),
    ("mode", ["a", "a", "b", "b", "c", "d", "e", "e"], "a,b,e", False, True),
    ("mode", ["5", "5", "33", "33", "42", "17", "99", "99"], "33,5,99", False, True),
    ("quartiles", [""], ",,,,,", False, True),
    ("quartiles", [""], ",,,,,", True, False),
    ("mean", ["5", "", "15", "10"], "7.5", True, False),
    ("sum", ["1", "2"], "3", False, True),
    ("sum", ["1.5", "2.8"], "4.3", False, True),
    ("sum", ["1.5", "2"], "3.5", False, True),
    ("sum", ["2", "1.5"], "3.5", False, True),
    ("sum", ["1.5", "hi", "2.8"], "4.3", False, True),
    ("sum", ["1", "", "2"], "3", False, True),
    ("sum", ["", "1", "2"], "3", False, True),
    ("min", ["2", "1.1"], "1.1", False, True),
    ("max", ["2", "1.1"], "2", False, True),
    ("min", ["2", "a", "1.1"], "1.1", False, True),
    ("max", ["2", "a", "1.1"], "a", False, True),
    ("min", ["", "2", "1.1"], "1.1", False, True),
    ("max", ["2", "1.1", ""], "2", False, True),
    ("min_length", ["aa", "a"], "1", False, True),
    ("max_length", ["a", "aa"], "2", False, True),
    ("min_length", ["", "aa", "a"], "0", False, True),
    ("max_length", ["a", "aa", ""], "2", False, True),
    ("mean", ["5", "15", "10"], "10", False, True),
    ("stddev", ["1", "2", "3"], "0.816496580927726", False, True),
    ("variance", ["3", "5", "7", "9", "11"], "8", False, True),
    ("mean", ["", "5", "15", "10"], "10", False, True),
    ("stddev", ["1", "2", "3", ""], "0.816496580927726", False, True),
    ("variance", ["3", "5", "7", "9", "", "10"], "6", False, True),
    ("mean", ["5", "15.1", "9.9"], "10", False, True),
    ("stddev", ["1", "2.1", "2.9"], "0.7788880963698614", False, True),
    ("variance", ["1.5", "2", "2.5", "3"], "0.3125", False, True),
    ("cardinality", ["a", "b", "a"], "2", False, True),
    ("mode", ["a", "b", "a"], "a", False, True),
    ("mode", ["", "a", "b", "a"], "a", False, True),
    ("median", ["1", "2", "3"], "2", False, True),
    ("median", ["", "1", "2", "3"], "2", False, True),
    ("median", ["1", "2", "3", "4"], "2.5", False, True),
    ("median", ["", "1", "2", "3", "4"], "2.5", False, True),
    ("median", ["1", "2.5", "3"], "2.5", False, True),
    ("quartiles", ["1", "2", "3"], "-2,1,2,3,2,4", False, True),
    ("quartiles", ["", "1", "2", "3"], "-2,1,2,3,2,4", False, True),
    ("quartiles", ["1", "2", "3", "4"], "-1.5,1.5,2.5,3.5,1,4.5", False, True),
    ("quartiles", ["", "1", "2", "3", "4"], "-1.5,1.5,2.5,3.5,1,4.5", False, True),
    ("quartiles", ["1", "2.0", "3", "4"], "-1.5,1.5,2.5,3.5,1,4.5", False, True),
    ("nullcount", ["", "1", "2"], "1", False, True),
    ("nullcount", ["a", "1", "2"], "0", False, True),
    ("nullcount", [" ", "1", "2"], "0", False, True),
    ("nullcount", ["", "", ""], "3", False, True),
]

EMPTY_CASES = [
    ("mean", ["a"], False, True),
    ("stddev", ["a"], False, True),
    ("variance", ["a"], False, True),
    ("median", ["a"], False, True),
    ("mode", ["a", "b"], False, True),
    ("mean", [""], False, True),
    ("stddev", [""], False, True),
    ("variance", [""], False, True),
    ("median", [""], False, True),
    ("mode", [""], False, True),
    ("mean", [""], True, False),
    ("stddev", [""], True, False),
    ("variance", [""], True, False),
    ("median", [""], True, False),
    ("mode", [""], True, False),
]


@pytest.mark.parametrize("headers", [True, False])
@pytest.mark.parametrize("field,rows,expected,nulls,dates", PREFIX_CASES)
def test_stats_value_prefix(field, rows, expected, nulls, dates, headers):
    got = field_value(field, rows, headers, nulls, dates)
    n = min(11, len(got), len(expected))
    assert n > 0
    assert got[:n] == expected[:n]


@pytest.mark.parametrize("headers", [True, False])
@pytest.mark.parametrize("field,rows,nulls,dates", EMPTY_CASES)
def test_stats_value_empty(field, rows, nulls, dates, headers):
    assert field_value(field, rows, headers, nulls, dates) == ""


@pytest.mark.parametrize(
    "field,expected",
    [
        ("type", "NULL"),
        ("cardinality", "0"),
        ("quartiles", ",,,,,"),
        ("mode", ""),
        ("mean", ""),
        ("median", ""),
    ],
)
def test_stats_no_records(field, expected):
    assert field_value(field, [], headers=True) == expected


def test_header_field_name():
    assert field_value("field", ["a"], headers=True) == "header"


def test_no_header_field_name():
    assert field_value("field", ["a"], headers=False) == "0"


def test_stat_headers_everything_order():
    which = WhichStats(cardinality=True, nullcount=True, quartiles=True, mode=True)
    assert stat_headers(which) == [
        "field", "type", "sum", "min", "max", "min_length", "max_length",
        "mean", "stddev", "variance",
        "lower_fence", "q1", "q2_median", "q3", "iqr", "upper_fence", "skew",
        "mode", "cardinality", "nullcount",
    ]


def test_record_length_matches_headers():
    which = WhichStats(cardinality=True, nullcount=True, median=True, mode=True)
    names, stats = compute_stats([["x"], ["1"], ["2"]], which=which)
    assert names == ["x"]
    assert len(stats[0].to_record()) + 1 == len(stat_headers(which))


def test_merge_matches_single_pass():
    which = WhichStats(quartiles=True, mode=True, cardinality=True, nullcount=True)
    whole = Stats(which)
    for value in ["1", "2", "3", "4"]:
        whole.add(value)
    left, right = Stats(which), Stats(which)
    for value in ["1", "2"]:
        left.add(value)
    for value in ["3", "4"]:
        right.add(value)
    left.merge(right)
    assert left.to_record() == whole.to_record()


def test_merge_rejects_different_settings():
    with pytest.raises(ValueError):
        Stats(WhichStats()).merge(Stats(WhichStats(mode=True)))


def test_select_limits_columns():
    rows = [["a", "b"], ["1", "x"], ["2", "y"]]
    names, stats = compute_stats(rows, select="b")
    assert names == ["b"]
    assert stats[0].to_record()[0] == "String"


def test_main_writes_output(tmp_path):
    source = tmp_path / "in.csv"
    source.write_text("n\n1\n2\n3\n", encoding="utf-8")
    out = tmp_path / "out.csv"
    assert main([str(source), "--nullcount", "-o", str(out)]) == 0
    rows = read_rows(str(out))
    assert rows[0][-1] == "nullcount"
    record = dict(zip(rows[0], rows[1]))
    assert record["field"] == "n"
    assert record["type"] == "Integer"
    assert record["sum"] == "6"
    assert record["mean"] == "2"
    assert record["nullcount"] == "0"