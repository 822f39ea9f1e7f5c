import os

from envdiff._src.constants import COLUMN_WIDTH, DEFAULT_CONDA_EXE


def pad_column(s: str, width: int = COLUMN_WIDTH) -> str:
    """Right align `s` in a column of `width` characters.

    Values longer than the column are cut to their first `width`
    characters, without any marker that they were shortened.
    """
    return s[:width].rjust(width)


def normalize_name(name: str) -> str:
    """Normalize a package or module name so that eg. `PyYAML`,
    `ruamel.yaml` and `scikit-learn` compare against import names"""
    return name.lower().replace("-", "_").replace(".", "_")


def get_conda_executable(conda_exe: str | None = None) -> str:
    """Return the conda executable to run.

    Falls back to the CONDA_EXE variable set by `conda activate`, then to
    `conda` on the PATH.
    """
    if conda_exe:
        return conda_exe
    return os.environ.get("CONDA_EXE") or DEFAULT_CONDA_EXE
