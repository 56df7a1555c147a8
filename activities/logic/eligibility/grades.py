"""Grade eligibility.

An activity's ``grades`` field is a small free-text expression such as
``"I4/I5–2nd"``, ``"3rd–6th"`` or ``"I4/I5 (G1) & 1st–3rd (G2)"``. It is parsed
into a list of clauses, each clause being either

  - Alternatives(["I4", "I5"])  -> kid grade equals one of the tokens
  - GradeRange(["I4", "I5"], "2nd") -> min(start alternatives) <= kid grade <= end

A kid matching ANY clause is eligible. Parenthetical notes are ignored,
unrecognised tokens never raise, and an expression without a single usable
clause admits every kid.
"""
from __future__ import annotations
import re
from typing import List, Optional, Union

from activities.utilities.constants import GRADE_ORDER

__all__ = [
    "Alternatives", "GradeRange", "normalize_grade_token", "grade_rank",
    "parse_grade_expression", "is_grade_eligible", "is_eligible",
]

_PARENTHETICAL = re.compile(r'\(.*?\)')
_CLAUSE_SEPARATOR = re.compile(r'[,;&]|\band\b', re.IGNORECASE)
_RANGE_SEPARATOR = re.compile(r'[–-]')
_INFANTIL_TOKEN = re.compile(r'^I([3-5])$', re.IGNORECASE)
_PRIMARY_TOKEN = re.compile(r'^([1-6])(st|nd|rd|th)$', re.IGNORECASE)


class Alternatives:
    """One or more single grades separated by '/'."""

    def __init__(self, grades: List[str]):
        self.grades = grades

    def matches(self, rank: int) -> bool:
        return any(GRADE_ORDER[g] == rank for g in self.grades)

    def __eq__(self, other):
        return isinstance(other, Alternatives) and self.grades == other.grades

    def __repr__(self) -> str:
        return f"Alternatives({self.grades!r})"


class GradeRange:
    """Inclusive range; the start may list alternatives, the lowest one wins."""

    def __init__(self, start: List[str], end: str):
        self.start = start
        self.end = end

    @property
    def start_rank(self) -> int:
        return min(GRADE_ORDER[g] for g in self.start)

    def matches(self, rank: int) -> bool:
        return self.start_rank <= rank <= GRADE_ORDER[self.end]

    def __eq__(self, other):
        return isinstance(other, GradeRange) and (self.start, self.end) == (other.start, other.end)

    def __repr__(self) -> str:
        return f"GradeRange({self.start!r}, {self.end!r})"


Clause = Union[Alternatives, GradeRange]


def normalize_grade_token(token: str) -> Optional[str]:
    """Return the canonical grade ('I4', '3rd', ...) or None if not recognised."""
    t = (token or '').strip()
    m = _INFANTIL_TOKEN.match(t)
    if m:
        return f"I{m.group(1)}"
    m = _PRIMARY_TOKEN.match(t)
    if m:
        return f"{m.group(1)}{m.group(2).lower()}"
    return None


def grade_rank(grade: str) -> Optional[int]:
    canonical = normalize_grade_token(grade)
    return GRADE_ORDER[canonical] if canonical else None


def _alternatives(text: str) -> List[str]:
    tokens = (normalize_grade_token(part) for part in text.split('/'))
    return [t for t in tokens if t]


def _parse_clause(clause: str) -> Optional[Clause]:
    pieces = _RANGE_SEPARATOR.split(clause)
    if len(pieces) == 1:
        grades = _alternatives(pieces[0])
        return Alternatives(grades) if grades else None
    if len(pieces) == 2:
        start = _alternatives(pieces[0])
        end = normalize_grade_token(pieces[1])
        if start and end:
            return GradeRange(start, end)
    return None


def parse_grade_expression(expression: Optional[str]) -> List[Clause]:
    """Parse a grade expression into its usable clauses (unusable ones are dropped)."""
    raw = _PARENTHETICAL.sub('', expression or '')
    clauses = []
    for part in _CLAUSE_SEPARATOR.split(raw):
        part = part.strip()
        if not part:
            continue
        clause = _parse_clause(part)
        if clause is not None:
            clauses.append(clause)
    return clauses


def is_grade_eligible(expression: Optional[str], grade: str) -> bool:
    clauses = parse_grade_expression(expression)
    if not clauses:
        return True
    rank = grade_rank(grade)
    if rank is None:
        return False
    return any(clause.matches(rank) for clause in clauses)


def is_eligible(activity, kid) -> bool:
    """True if the kid's grade satisfies the activity's grade expression."""
    return is_grade_eligible(activity.grades, kid.grade)
