from enum import Enum


# width of every column when the diff is printed with --format
COLUMN_WIDTH = 20

COMMENT_MARKER = "#"

PYPI_CHANNEL = "pypi"

DEFAULT_CONDA_EXE = "conda"

HEADER_LABELS = ("Name", "Version", "Build", "Channel", "First env", "Second env")


class DiffMode(str, Enum):
    FIRST_ONLY = "first-only"
    SECOND_ONLY = "second-only"
    BOTH = "both"
