"""Tools for searching, selecting, sorting, slicing, splitting, transposing, tabulating and profiling CSV data."""

__version__ = "0.1.0"