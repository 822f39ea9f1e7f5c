import os
import subprocess

import pytest

from envdiff._src import listing
from envdiff._src.exceptions import EnvironmentListingFailed
from envdiff._src.models.package import PackageRecord


CONDA_LIST_OUTPUT = os.linesep.join([
    "# packages in environment at /opt/conda/envs/envA:",
    "#",
    "# Name                    Version                   Build  Channel",
    "numpy                     1.2.0                     build0",
    "numpy                     1.2.0                     build0",
    "requests                  2.31.0                    pypi_0    pypi",
    "this line is not a package record",
    "",
])


def test_parse_listing_skips_headers_and_bad_lines():
    packages = listing.parse_listing(CONDA_LIST_OUTPUT, "envA")

    assert packages == {
        PackageRecord.parse("numpy 1.2.0 build0", "envA"),
        PackageRecord.parse("requests 2.31.0 pypi_0 pypi", "envA"),
    }
    assert {pkg.env_name for pkg in packages} == {"envA"}


def test_parse_listing_of_empty_output():
    assert listing.parse_listing("", "envA") == set()


def _fake_run(returncode=0, stdout=b"", stderr=b""):
    calls = []

    def run(command, capture_output):
        calls.append(command)
        return subprocess.CompletedProcess(command, returncode, stdout=stdout, stderr=stderr)

    return run, calls


def test_list_packages_runs_conda_list(monkeypatch):
    run, calls = _fake_run(stdout=CONDA_LIST_OUTPUT.encode("utf-8"))
    monkeypatch.setattr(listing.subprocess, "run", run)

    text = listing.list_packages("envA", conda_exe="/opt/conda/bin/conda")

    assert text == CONDA_LIST_OUTPUT
    assert calls == [["/opt/conda/bin/conda", "list", "-n", "envA"]]


def test_list_packages_uses_conda_exe_variable(monkeypatch):
    run, calls = _fake_run()
    monkeypatch.setattr(listing.subprocess, "run", run)
    monkeypatch.setenv("CONDA_EXE", "/somewhere/conda")

    listing.list_packages("envA")

    assert calls[0][0] == "/somewhere/conda"


def test_list_packages_defaults_to_conda_on_path(monkeypatch):
    run, calls = _fake_run()
    monkeypatch.setattr(listing.subprocess, "run", run)
    monkeypatch.delenv("CONDA_EXE", raising=False)

    listing.list_packages("envA")

    assert calls[0][0] == "conda"


def test_non_zero_exit_fails(monkeypatch):
    run, _ = _fake_run(returncode=1, stderr=b"EnvironmentLocationNotFound")
    monkeypatch.setattr(listing.subprocess, "run", run)

    with pytest.raises(EnvironmentListingFailed, match="EnvironmentLocationNotFound"):
        listing.list_packages("missing")


def test_non_text_output_fails(monkeypatch):
    run, _ = _fake_run(stdout=b"\xff\xfe\xfa")
    monkeypatch.setattr(listing.subprocess, "run", run)

    with pytest.raises(EnvironmentListingFailed):
        listing.list_packages("envA")


def test_missing_executable_fails(monkeypatch):
    def run(command, capture_output):
        raise FileNotFoundError(2, "No such file or directory", command[0])

    monkeypatch.setattr(listing.subprocess, "run", run)

    with pytest.raises(EnvironmentListingFailed):
        listing.list_packages("envA", conda_exe="not-conda")


def test_get_package_set(monkeypatch):
    run, _ = _fake_run(stdout=CONDA_LIST_OUTPUT.encode("utf-8"))
    monkeypatch.setattr(listing.subprocess, "run", run)

    packages = listing.get_package_set("envA")

    assert sorted(pkg.name for pkg in packages) == ["numpy", "requests"]
