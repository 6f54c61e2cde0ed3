from dataclasses import dataclass
from enum import Enum
from functools import total_ordering

from app.core.errors import InputValidationError, TermRangeError


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"


# Academic cycle within one calendar year
SEASON_ORDER: tuple[Season, ...] = (Season.SPRING, Season.SUMMER, Season.FALL)


@total_ordering
@dataclass(frozen=True)
class Term:
    season: Season
    year: int

    @property
    def key(self) -> tuple[int, int]:
        return self.year, SEASON_ORDER.index(self.season)

    @property
    def label(self) -> str:
        return f"{self.season.value.title()} {self.year}"

    def __lt__(self, other: "Term") -> bool:
        if not isinstance(other, Term):
            return NotImplemented
        return self.key < other.key

    def __str__(self) -> str:
        return self.label


def next_term(term: Term) -> Term:
    index = SEASON_ORDER.index(term.season) + 1
    if index >= len(SEASON_ORDER):
        return Term(SEASON_ORDER[0], term.year + 1)
    return Term(SEASON_ORDER[index], term.year)


def term_sequence(start: Term, target: Term) -> list[Term]:
    """Every term from ``start`` through ``target`` inclusive, in academic order.

    Raises TermRangeError when ``target`` comes before ``start``.
    """
    if target < start:
        raise TermRangeError(
            f"Target term {target.label} precedes starting term {start.label}"
        )
    terms = [start]
    while terms[-1] != target:
        terms.append(next_term(terms[-1]))
    return terms


def parse_season(value: str) -> Season:
    try:
        return Season(value.strip().lower())
    except ValueError:
        raise InputValidationError(
            f"Unknown season '{value}'. Must be one of: {[s.value for s in SEASON_ORDER]}"
        ) from None


def parse_term_label(label: str) -> Term:
    """Parse labels such as ``"Fall 2024"`` or ``"spring 2026"``."""
    parts = label.strip().split()
    if len(parts) != 2:
        raise InputValidationError(f"Malformed term '{label}'. Expected '<Season> <Year>'")
    season_part, year_part = parts
    if not year_part.isdigit():
        raise InputValidationError(f"Malformed term '{label}'. Year must be numeric")
    return Term(parse_season(season_part), int(year_part))
