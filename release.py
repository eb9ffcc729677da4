"""
Keeps the version constants in broadcast/__init__.py in step with
pyproject.toml.

    python release.py           # write the pyproject version into the package
    python release.py --check   # exit 1 if the two disagree
"""

import argparse
import re
import sys
from pathlib import Path
from typing import Optional


TOML_PATH = Path(Path(__file__).parent, "pyproject.toml")
BROADCAST_PATH = Path(Path(__file__).parent, "broadcast/__init__.py")

VERSION = tuple[int, int, int]

_CONSTANT_PATTERNS = {
    "major": r"version_major\s*=\s*(\d+)",
    "minor": r"version_minor\s*=\s*(\d+)",
    "patch": r"version_patch\s*=\s*(\d+)",
}


def parse_version(version_str: str) -> VERSION:
    """Parse 'X.Y.Z' (optionally quoted) into a (major, minor, patch) tuple."""
    match = re.match(r"^(\d+)\.(\d+)\.(\d+)$", version_str.strip().strip("\"'"))
    if not match:
        raise ValueError(f"Invalid version format: {version_str}")
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def read_toml_version(path: Path = TOML_PATH) -> VERSION:
    """Extract the [project] version from a pyproject file."""
    content = path.read_text(encoding="utf-8")
    match = re.search(r'^version\s*=\s*["\'](\d+\.\d+\.\d+)["\']', content, re.M)

    if not match:
        raise ValueError(f"No version field found in {path}")

    return parse_version(match.group(1))


def read_python_version(path: Path = BROADCAST_PATH) -> VERSION:
    """Extract the version constants from the package source."""
    content = path.read_text(encoding="utf-8")

    parts = []
    for name, pattern in _CONSTANT_PATTERNS.items():
        match = re.search(pattern, content)
        if not match:
            raise ValueError(f"version_{name} not found in {path}")
        parts.append(int(match.group(1)))

    major, minor, patch = parts
    return major, minor, patch


def write_python_version(new_version: VERSION, path: Path = BROADCAST_PATH) -> None:
    """Rewrite the version constants in the package source."""
    content = path.read_text(encoding="utf-8")

    for (name, pattern), value in zip(_CONSTANT_PATTERNS.items(), new_version):
        content, count = re.subn(pattern, f"version_{name} = {value}", content)
        if count == 0:
            raise ValueError(f"version_{name} not found in {path}")

    path.write_text(content, encoding="utf-8")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--check",
        action="store_true",
        help="only report whether the versions agree",
    )
    args = parser.parse_args(argv)

    toml_version = read_toml_version()
    python_version = read_python_version()

    if args.check:
        if toml_version != python_version:
            print(f"Version mismatch: pyproject {toml_version}, package {python_version}")
            return 1
        return 0

    write_python_version(toml_version)
    print(f"Updated {BROADCAST_PATH} to {'.'.join(map(str, toml_version))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
