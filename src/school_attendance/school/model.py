from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Holiday:
    """A non-teaching day; the grid locks attendance edits on it."""

    date: str  # YYYY-MM-DD
    name: str


@dataclass(frozen=True)
class BimesterConfig:
    """A reporting period. Dates are inclusive ISO strings."""

    bimester_id: int
    name: str
    start: str
    end: str


def default_bimesters(year: int) -> list[BimesterConfig]:
    """Approximate Brazilian school calendar used until the remote sends its own."""
    return [
        BimesterConfig(1, "1º Bimestre", f"{year}-02-01", f"{year}-04-30"),
        BimesterConfig(2, "2º Bimestre", f"{year}-05-01", f"{year}-07-15"),
        BimesterConfig(3, "3º Bimestre", f"{year}-08-01", f"{year}-09-30"),
        BimesterConfig(4, "4º Bimestre", f"{year}-10-01", f"{year}-12-20"),
    ]
