"""Target list sources."""

from pathlib import Path
from typing import Iterable, List

from .exceptions import TargetLoadError


def clean_targets(values: Iterable[str]) -> List[str]:
    """Trim whitespace and drop blank entries. Duplicates are kept."""
    return [v.strip() for v in values if v and v.strip()]


def read_targets(path: str) -> List[str]:
    """Read one target per line from a file."""
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise TargetLoadError(f"cannot read targets from {path}: {e}") from e
    return clean_targets(text.splitlines())


def split_targets(value: str) -> List[str]:
    """Split a comma-separated target argument."""
    return clean_targets(value.split(","))


def load_targets(target: str = None, targets_file: str = None) -> List[str]:
    """
    Load targets from a comma-separated argument or a file.

    Raises:
        TargetLoadError: no source given, file unreadable, or list empty
    """
    if target:
        targets = split_targets(target)
    elif targets_file:
        targets = read_targets(targets_file)
    else:
        raise TargetLoadError("no targets given (use --target or --targets)")

    if not targets:
        raise TargetLoadError("target list is empty")
    return targets
