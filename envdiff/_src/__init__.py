# Implementation package. The diff engine lives in diff.py, the
# `conda list` collaborator in listing.py and the import scanner
# in scanner.py. Nothing here is part of the public API.
