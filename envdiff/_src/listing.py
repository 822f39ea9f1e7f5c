import logging
import os
import subprocess

from envdiff._src.constants import COMMENT_MARKER
from envdiff._src.exceptions import EnvironmentListingFailed, RecordParseError
from envdiff._src.models.package import PackageRecord
from envdiff._src.utils import get_conda_executable

logger = logging.getLogger(__name__)


def list_packages(env_name: str, conda_exe: str | None = None) -> str:
    """Run `conda list -n <env_name>` and return its output as text"""
    command = [get_conda_executable(conda_exe), "list", "-n", env_name]
    logger.debug("running %s", " ".join(command))

    try:
        result = subprocess.run(command, capture_output=True)
    except OSError as e:
        raise EnvironmentListingFailed(env_name, command, e) from e

    if result.returncode != 0:
        err = result.stderr.decode("utf-8", errors="replace").strip()
        raise EnvironmentListingFailed(
            env_name, command, f"exit code {result.returncode}: {err}"
        )

    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EnvironmentListingFailed(env_name, command, e) from e


def parse_listing(text: str, env_name: str) -> set[PackageRecord]:
    """Parse the output of `conda list` into the package set of `env_name`.

    Header lines starting with `#` are ignored, and so is any line that
    does not read as `name version build [channel]`.
    """
    packages = set()
    for line in text.split(os.linesep):
        if line.startswith(COMMENT_MARKER):
            continue
        try:
            packages.add(PackageRecord.parse(line, env_name))
        except RecordParseError:
            continue
    return packages


def get_package_set(env_name: str, conda_exe: str | None = None) -> set[PackageRecord]:
    packages = parse_listing(list_packages(env_name, conda_exe), env_name)
    logger.debug("environment %s has %d packages", env_name, len(packages))
    return packages
