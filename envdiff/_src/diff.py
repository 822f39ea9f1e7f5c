import logging
from typing import Iterable, List, Set, Tuple

from envdiff._src.constants import HEADER_LABELS, DiffMode
from envdiff._src.models.options import DiffOptions
from envdiff._src.models.package import PackageRecord
from envdiff._src.utils import pad_column

logger = logging.getLogger(__name__)


def compute_differences(
    first_set: Set[PackageRecord], second_set: Set[PackageRecord]
) -> Tuple[Set[PackageRecord], Set[PackageRecord]]:
    """Return the packages only in the first set and the packages only in the second"""
    packages_in_first_not_in_second = first_set - second_set
    packages_in_second_not_in_first = second_set - first_set
    return packages_in_first_not_in_second, packages_in_second_not_in_first


def format_row(pkg: PackageRecord, first: bool) -> str:
    """Render a package as six fixed width columns.

    The environment name goes in the fifth column for packages of the
    first environment and in the sixth column otherwise.
    """
    first_env, second_env = (pkg.env_name, "") if first else ("", pkg.env_name)
    return "".join(
        pad_column(value)
        for value in (pkg.name, pkg.version, pkg.build, pkg.channel, first_env, second_env)
    )


def format_header() -> str:
    return "".join(pad_column(label) for label in HEADER_LABELS)


def _select(packages: Iterable[PackageRecord], channel: str | None) -> List[PackageRecord]:
    # the channel filter only hides rows, it never changes what differs
    return [pkg for pkg in sorted(packages) if channel is None or pkg.channel == channel]


def diff(
    first_set: Set[PackageRecord],
    second_set: Set[PackageRecord],
    first_env_name: str,
    second_env_name: str,
    options: DiffOptions | None = None,
) -> List[str]:
    """Compare the package sets of two environments.

    Parameters
    ----------
    first_set, second_set: set[PackageRecord]
        Package sets of the two environments
    first_env_name, second_env_name: str
        Names of the two environments. Rows are placed in the first env
        column when their own env_name is `first_env_name`.
    options: DiffOptions
        Channel filter, mode and column formatting

    Returns
    -------
    lines: list[str]
        The lines to print, sorted by package name
    """
    if options is None:
        options = DiffOptions()

    only_in_first, only_in_second = compute_differences(first_set, second_set)
    logger.debug(
        "%d packages only in %s, %d packages only in %s",
        len(only_in_first), first_env_name, len(only_in_second), second_env_name,
    )

    if options.mode == DiffMode.FIRST_ONLY:
        return [str(pkg) for pkg in _select(only_in_first, options.channel)]
    elif options.mode == DiffMode.SECOND_ONLY:
        return [str(pkg) for pkg in _select(only_in_second, options.channel)]
    else:
        packages = _select([*only_in_first, *only_in_second], options.channel)
        if not options.column_format:
            return [str(pkg) for pkg in packages]

        lines = [format_header()]
        for pkg in packages:
            lines.append(format_row(pkg, first=pkg.env_name == first_env_name))
        return lines
