# csvtoolbelt

A small set of command-line tools, and the Python functions behind them, for
working with CSV data: select and reorder columns, filter rows by regular
expression, sort, slice, split into chunks, transpose, print as an aligned
table and compute per-column statistics with type inference.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Commands

Every command reads the CSV file given as its last argument, or standard input
when none is given (or when it is `-`). Commands that produce CSV write it to
standard output, or to the file given with `-o/--output`. Most commands accept
`-d/--delimiter` for a one-character field delimiter and `-n/--no-headers`
when the first row is data rather than column names.

### csvtb-select

Pick, reorder, duplicate or drop columns. Columns are referenced by 1-based
index or by name, `a-b` ranges are allowed (open at either end, and reversed
when the start comes after the end), a leading `!` inverts a selection,
`Name[2]` picks the third column called `Name`, `"..."` quotes a name that
contains selector characters, and `/regex/` selects every column whose header
matches (it is an error if none does).

```
csvtb-select 1,4 data.csv
csvtb-select 3- data.csv
csvtb-select '!1-2' data.csv
csvtb-select '/^a/' data.csv
```

### csvtb-search

Keep rows where any selected field (`-s/--select`, all by default) matches a
regular expression. `-i/--ignore-case` matches case-insensitively and
`-v/--invert-match` keeps the rows that do not match. Character classes are
ASCII-only unless `-u/--unicode` is given or the environment variable
`CSVTOOLBELT_REGEX_UNICODE` is set.

```
csvtb-search --ignore-case --select name '^jo' data.csv
csvtb-search --invert-match 'waldo' data.csv
csvtb-search --flag matched 'waldo' data.csv
```

With `-f/--flag <column>` every row is kept and a new column holds the row
number of each matching row (the first data row is number 2), or `0`.

### csvtb-searchset

Like `csvtb-search`, but with many regular expressions read from a file, one
per line, matched in a single pass; the same options apply. With
`--flag <column>` a matching row is marked as
`<row>;[<numbers of the matching regexes>]`, for example `3;[1, 2]`; with
`--invert-match` as well, only the row number is written.

```
csvtb-searchset patterns.txt data.csv
csvtb-searchset --flag flagged patterns.txt data.csv
```

### csvtb-sort

Sort rows lexicographically on the selected columns, numerically with
`-N/--numeric`, in reverse with `-R/--reverse`, or shuffle with `--random`
(reproducible with `--seed`). `-u/--uniq` drops consecutive rows whose
selected fields are equal. In a numeric sort, a field that is not a number
orders before one that is.

```
csvtb-sort --select 2 --numeric --reverse data.csv
csvtb-sort --random --seed 42 data.csv
```

### csvtb-slice

Output a half-open range of records; the header row is not counted and is
always written unless `--no-headers` is given. Use `-s/--start`,
`-e/--end` or `-l/--len`, or `-i/--index` for a single record. A negative
`--start` counts back from the last record.

```
csvtb-slice --start 10 --len 5 data.csv
csvtb-slice --index 0 data.csv
csvtb-slice --start -3 data.csv
```

### csvtb-split

Write chunks of `-s/--size` records (default 500) into a directory, which is
created if needed. Files are named from the `--filename` template (default
`{}.csv`), where `{}` is replaced by the zero-based index of the chunk's first
record, zero-padded to `--pad` digits; characters other than letters, digits,
`.`, `_` and `-` are replaced with `_`. Every chunk starts with the header row
unless `--no-headers` is given.

```
csvtb-split --size 1000 --pad 5 --filename 'part-{}.csv' out/ data.csv
```

### csvtb-transpose

Turn rows into columns and columns into rows. All rows must have the same
number of fields. `-m/--multipass` reads the file once per output row instead
of holding it all in memory (it has no effect on standard input).

```
csvtb-transpose data.csv
```

### csvtb-table

Print the data as a table with aligned columns. Every row, including the
first, is treated as data. `-w/--width` sets the minimum column width,
`-p/--pad` the spacing between columns, `-a/--align` is one of `left`,
`right` or `center`, and `-c/--condense` cuts fields longer than the given
number of characters and marks the cut with `...`.

```
csvtb-table --align right --condense 20 data.csv
```

### csvtb-stats

Compute per-column statistics: inferred type (NULL, Integer, Float, String,
Date, DateTime, Unknown), sum, min/max, min/max length (in bytes), mean,
standard deviation and variance. Optional statistics: `--median`,
`--quartiles` (lower fence, q1, median, q3, IQR, upper fence and skew),
`--mode` (the values that occur most often, if any occurs more than once),
`--cardinality`, `--nullcount`, or `--everything`. `--nulls` counts empty
values as zero in the mean and deviation; `--dates` turns on date detection.
With `--no-headers`, columns are named by their zero-based position.

```
csvtb-stats --everything --dates data.csv
```

## Library use

The commands are thin wrappers around plain functions that work on rows as
lists of strings.

```python
from csvtoolbelt.csvio import read_rows, write_rows
from csvtoolbelt.search import search
from csvtoolbelt.sort import sort_rows
from csvtoolbelt.transpose import transpose

rows = read_rows("data.csv", ",")
hits = search(rows, "waldo", select="h2", ignore_case=True)
ordered = sort_rows(rows, select="1", numeric=True)
write_rows(transpose(rows), "transposed.csv", ",")
```

Other entry points: `csvtoolbelt.selection` (`parse_selection`,
`resolve_selection`, `select_columns`, `Selection`), `csvtoolbelt.searchset`
(`read_regexset`, `searchset`), `csvtoolbelt.slicer` (`compute_range`,
`slice_rows`), `csvtoolbelt.splitter` (`render_filename`, `split_csv`),
`csvtoolbelt.table` (`format_table`, `condense`, `Align`) and
`csvtoolbelt.stats` (`compute_stats`, `stat_headers`, `Stats`,
`WhichStats`), with the type inference rules and typed aggregates in
`csvtoolbelt.fieldtype` (`FieldType`, `TypedSum`, `TypedMinMax`).

## Limitations

Every command reads the whole input into memory. There is no support for CSV
index files and no parallel processing: `csvtb-stats` accepts `-j/--jobs` but
ignores it, and `csvtb-slice` and `csvtb-split` always read from the start of
the data.