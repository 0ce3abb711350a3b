"""Name based exclusion shared by the mirror and the tree hasher."""

from fnmatch import fnmatchcase


def is_excluded(name: str, patterns: list[str]) -> bool:
    """Check a single entry name against shell style patterns."""
    return any(fnmatchcase(name, pattern) for pattern in patterns)
