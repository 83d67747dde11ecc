from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from .dto import IntakeDto
from .timeutil import calendar_day, now_local

PROGRESS_CAP = 150


@dataclass
class IntakeDaySummary:
    entries: List[IntakeDto]
    total_calories: float
    total_protein: float
    calorie_progress: float
    protein_progress: float


def _progress(value: float, target: Optional[float]) -> float:
    if not target:
        return 0
    return min(value / target * 100, PROGRESS_CAP)


def summarize_day(
    entries: Iterable[IntakeDto],
    calorie_target: Optional[float] = None,
    protein_target: Optional[float] = None,
    today: Optional[date] = None,
) -> IntakeDaySummary:
    """Totals for the entries logged today, progress capped at 150%."""
    today = today or date.today()
    todays = [
        e for e in entries
        if calendar_day(e.timestamp or now_local()) == today
    ]
    calories = sum(e.calories for e in todays)
    protein = sum(e.protein or 0 for e in todays)
    return IntakeDaySummary(
        entries=todays,
        total_calories=calories,
        total_protein=protein,
        calorie_progress=_progress(calories, calorie_target),
        protein_progress=_progress(protein, protein_target),
    )
