import logging
import os
from typing import List, Optional

import rich
import typer
import yaml
from rich.table import Table
from typing_extensions import Annotated

from envdiff import __version__
from envdiff._src.constants import PYPI_CHANNEL, DiffMode
from envdiff._src.diff import diff as diff_environments
from envdiff._src.exceptions import EnvironmentListingFailed, UsageError
from envdiff._src.listing import get_package_set
from envdiff._src.log import setup_logging
from envdiff._src.models.options import DiffOptions
from envdiff._src.scanner import find_used_packages, format_requirements, scan_imports

logger = logging.getLogger(__name__)


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool):
    if value:
        print(f"envdiff {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="show the version and exit"
    ),
    verbose: Annotated[bool, typer.Option(
        "--verbose", "-v",
        help="print debug logs to stderr"
    )] = False,
):
    """Small tools to compare conda environments"""
    setup_logging(verbose)


def _get_package_set(env_name, conda_exe):
    try:
        return get_package_set(env_name, conda_exe)
    except EnvironmentListingFailed as e:
        logger.error(e.msg)
        raise typer.Exit(code=1)


def _build_options(pip_only, channel, first_only, second_only, format) -> DiffOptions:
    if pip_only:
        if channel is not None and channel != PYPI_CHANNEL:
            raise UsageError(f"Error: --pip-only conflicts with --channel {channel}")
        channel = PYPI_CHANNEL

    # first-only wins when both early exit modes are requested
    if first_only:
        mode = DiffMode.FIRST_ONLY
    elif second_only:
        mode = DiffMode.SECOND_ONLY
    else:
        mode = DiffMode.BOTH

    return DiffOptions(channel=channel, mode=mode, column_format=format)


@app.command()
def diff(
    envs: List[str] = typer.Argument(
        None,
        help="the two conda envs to compare",
        show_default=False,
    ),
    pip_only: bool = typer.Option(
        False,
        help="only shows pypi packages"
    ),
    channel: str = typer.Option(
        None,
        help="only shows packages from this channel"
    ),
    first_only: bool = typer.Option(
        False,
        help="only shows first differences"
    ),
    second_only: bool = typer.Option(
        False,
        help="only shows second differences"
    ),
    format: Annotated[bool, typer.Option(
        "--format", "-f",
        help="format output"
    )] = False,
    conda_exe: str = typer.Option(
        None,
        envvar="CONDA_EXE",
        help="conda executable used to list the envs"
    ),
):
    """Compare the packages of two conda environments"""
    try:
        if envs is None or len(envs) != 2:
            raise UsageError("Error: wrong env list length")
        options = _build_options(pip_only, channel, first_only, second_only, format)
    except UsageError as e:
        typer.echo(e.msg, err=True)
        raise typer.Exit(code=1)

    first, second = envs
    first_set = _get_package_set(first, conda_exe)
    second_set = _get_package_set(second, conda_exe)

    for line in diff_environments(first_set, second_set, first, second, options):
        print(line)


@app.command()
def show(
    env: str = typer.Argument(
        help="conda env name"
    ),
    as_yaml: Annotated[bool, typer.Option(
        "--yaml",
        help="dump the packages as yaml"
    )] = False,
    conda_exe: str = typer.Option(
        None,
        envvar="CONDA_EXE",
        help="conda executable used to list the env"
    ),
):
    """List the packages of a conda environment"""
    packages = sorted(_get_package_set(env, conda_exe))

    if as_yaml:
        print(yaml.dump([pkg.model_dump() for pkg in packages], sort_keys=False))
    else:
        for pkg in packages:
            print(pkg)


@app.command()
def used(
    path: Annotated[str, typer.Option(
        "--path", "-p",
        help="project path"
    )] = "./",
    conda_name: Annotated[str, typer.Option(
        "--conda-name", "-c",
        help="conda env name"
    )] = "base",
    save: str = typer.Option(
        None,
        help="save requirements file path"
    ),
    show_imports: bool = typer.Option(
        False,
        help="print every import statement found"
    ),
    conda_exe: str = typer.Option(
        None,
        envvar="CONDA_EXE",
        help="conda executable used to list the env"
    ),
):
    """Find the packages of a conda env that a project imports"""
    package_set = _get_package_set(conda_name, conda_exe)

    if not os.path.isdir(path):
        typer.echo(f"Error: {path} is not a directory", err=True)
        raise typer.Exit(code=1)

    try:
        references = scan_imports(path)
    except OSError as e:
        logger.error(f"Failed to read the python files below {path}: {e}")
        raise typer.Exit(code=1)

    if show_imports:
        for ref in references:
            print(f"{ref.lineno}  {ref.line}  {ref.module}")

    packages = find_used_packages(references, package_set)

    table = Table(title=f"Packages of {conda_name} used in {path}")
    table.add_column("name", justify="left", no_wrap=True)
    table.add_column("version", justify="left", no_wrap=True)
    table.add_column("build", justify="left", no_wrap=True)
    table.add_column("channel", justify="left", no_wrap=True)

    for pkg in packages:
        table.add_row(pkg.name, pkg.version, pkg.build, pkg.channel)

    rich.print(table)

    # If a save path is given write a pip style requirements file
    if save is not None:
        with open(save, "w+") as requirements_file:
            requirements_file.write(format_requirements(packages))

    print("END")
