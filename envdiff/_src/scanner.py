import logging
import os
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Set

from pydantic import BaseModel, ConfigDict

from envdiff._src.models.package import PackageRecord
from envdiff._src.utils import normalize_name

logger = logging.getLogger(__name__)


IMPORT_REGEX = re.compile(r"import\s+([\w\.]+)(?:\s+as\s+\w+)?", re.IGNORECASE)

FROM_IMPORT_REGEX = re.compile(r"from\s+([\w\.]+)(?:\s+import\s+\w+)?", re.IGNORECASE)


class ImportReference(BaseModel):
    """A source line that imports a module"""
    model_config = ConfigDict(frozen=True)

    path: Path
    # 0-based line index
    lineno: int
    line: str
    # top level module, eg. `os` for `import os.path`
    module: str


def extract_module_name(code: str) -> str:
    """Return the top level module imported by a line of code, or an
    empty string when the line does not import anything.

    `from x import y` statements take precedence over `import x`.
    """
    for regex in (FROM_IMPORT_REGEX, IMPORT_REGEX):
        match = regex.search(code)
        if match is not None:
            return match.group(1).split(".")[0]
    return ""


def iter_python_files(path: str | Path) -> Iterator[Path]:
    for root, dirs, files in os.walk(path):
        dirs.sort()
        for file_name in sorted(files):
            if file_name.endswith(".py"):
                yield Path(root) / file_name


def scan_imports(path: str | Path) -> List[ImportReference]:
    """Collect every import statement of the python files below `path`"""
    references = []
    for file_path in iter_python_files(path):
        with open(file_path, "r", encoding="utf-8", errors="replace") as file:
            for index, line in enumerate(file):
                line = line.rstrip("\r\n")
                module = extract_module_name(line)
                if module != "":
                    references.append(
                        ImportReference(path=file_path, lineno=index, line=line, module=module)
                    )
    logger.debug("found %d import statements below %s", len(references), path)
    return references


def find_used_packages(
    references: Iterable[ImportReference], package_set: Set[PackageRecord]
) -> List[PackageRecord]:
    """Return the packages of `package_set` that are imported by `references`.

    Packages are matched on their normalized name, so only distributions
    whose name matches their import name (numpy, scipy, ...) are found.
    """
    modules = {normalize_name(ref.module) for ref in references}

    used = {}
    for pkg in sorted(package_set):
        key = normalize_name(pkg.name)
        if key in modules and key not in used:
            used[key] = pkg
    return sorted(used.values())


def format_requirements(packages: Iterable[PackageRecord]) -> str:
    return "".join(f"{pkg.name}=={pkg.version}\n" for pkg in packages)
