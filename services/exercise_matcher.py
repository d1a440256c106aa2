"""
Exercise Matcher - resolves exercise names proposed by the model against the catalog
"""

import math
import re
from typing import Any, Dict, Iterable, List, Optional

from app.schema import ExerciseCatalogEntry

_PARENTHETICAL = re.compile(r"\s*\([^)]*\)")
_WHITESPACE = re.compile(r"\s+")


def normalise_name(value: Any) -> str:
    """Lower-case, drop "(...)" annotations and collapse whitespace."""
    text = str(value or "").lower()
    text = _PARENTHETICAL.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def ensure_number(value: Any, fallback):
    """Return value as a finite number, or fallback when it is not one."""
    if value is None or isinstance(value, bool):
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return int(number) if number.is_integer() else number


def is_reps_value(value: Any) -> bool:
    # reps may be "8-12", "AMRAP 5'" or a plain number
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, (int, str)) and not isinstance(value, bool)


class ExerciseMatcher:
    """Name lookup over a catalog snapshot: exact match first, then normalized."""

    def __init__(self, exercises: Iterable[ExerciseCatalogEntry]):
        self.exercises: List[ExerciseCatalogEntry] = list(exercises)
        self._by_name: Dict[str, ExerciseCatalogEntry] = {
            exercise.name.lower(): exercise for exercise in self.exercises
        }

    def __len__(self) -> int:
        return len(self.exercises)

    def find(self, name: Any) -> Optional[ExerciseCatalogEntry]:
        if not name:
            return None
        exact = self._by_name.get(str(name).lower())
        if exact:
            return exact

        wanted = normalise_name(name)
        return next(
            (ex for ex in self.exercises if normalise_name(ex.name) == wanted),
            None,
        )
