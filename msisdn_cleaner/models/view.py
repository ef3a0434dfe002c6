from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""View filter model: which subset of the dataset is listed or exported."""

__all__ = [
    "ALL",
    "ViewTab",
    "ViewFilter",
]

ALL = "all"


class ViewTab(Enum):
    """Status tab. ALL shows every row; the others select one status."""
    ALL = "all"
    VALID = "valid"
    INVALID = "invalid"
    DUPLICATES = "duplicates"


@dataclass(frozen=True)
class ViewFilter:
    """Combined tab / search / telco / bundle size filter.

    ``search`` matches phone text case-insensitively as a substring. ``telco`` and
    ``bundle_size`` match exactly unless set to ``"all"``.
    """
    tab: ViewTab = ViewTab.ALL
    search: str = ""
    telco: str = ALL
    bundle_size: str = ALL
