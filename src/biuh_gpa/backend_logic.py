import math
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

import numpy as np

from .config import (
    EVALUATION_BANDS,
    FAILING_LABEL,
    FAILING_TIER,
    NMAX,
    NMIN,
    SCORE_MAX,
    SCORE_MIN,
)

# Leading float literal, same prefix rule as a browser number input
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class CourseRecord:
    """One course as the aggregator sees it: name, credit and parsed score."""

    name: str
    credit: float
    score: Optional[float]


@dataclass(frozen=True)
class Evaluation:
    label: str
    tier: int


@dataclass(frozen=True)
class Totals:
    total_credits: float
    weighted_score: Optional[float]
    weighted_secondary: Optional[float]
    count: int


_EMPTY_TOTALS = Totals(total_credits=0.0, weighted_score=None, weighted_secondary=None, count=0)


# ------------------------
# Parsing and validation
# ------------------------
def parse_score(raw) -> Optional[float]:
    """
    Raw input -> float, or None when nothing usable was entered.

    Out-of-range numbers are returned untouched; deciding whether they count
    is left to is_valid_score.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float, np.integer, np.floating)):
        try:
            value = float(raw)
        except OverflowError:
            return None
    else:
        text = str(raw).strip()
        if not text:
            return None
        match = _NUMBER_PREFIX.match(text)
        if match is None:
            return None
        value = float(match.group(0))

    if not math.isfinite(value):
        return None
    return value


def is_valid_score(score: Optional[float]) -> bool:
    return score is not None and SCORE_MIN <= score <= SCORE_MAX


def is_valid_credit(credit: Optional[float]) -> bool:
    return credit is not None and credit > 0


def is_invalid_input(score: Optional[float]) -> bool:
    """True when something was entered but it lies outside [0, 100]."""
    return score is not None and not is_valid_score(score)


# ------------------------
# Per-course conversions
# ------------------------
def to_secondary_grade(score: Optional[float]) -> Optional[float]:
    """
    Percentage score -> German grade (1 best, 5 worst).

    Scores in [NMIN, NMAX] map linearly onto [1, 4]; anything below NMIN
    is a flat 5, there are no values between 4 and 5.
    """
    if not is_valid_score(score):
        return None
    if score < NMIN:
        return 5.0

    value = 1 + 3 * ((NMAX - score) / (NMAX - NMIN))
    return min(4.0, max(1.0, value))


def evaluate(score: Optional[float]) -> Optional[Evaluation]:
    if not is_valid_score(score):
        return None

    for lower, tier, label in EVALUATION_BANDS:
        if score >= lower:
            return Evaluation(label=label, tier=tier)
    return Evaluation(label=FAILING_LABEL, tier=FAILING_TIER)


# ------------------------
# Aggregation
# ------------------------
def is_countable(record: CourseRecord) -> bool:
    return is_valid_score(record.score) and is_valid_credit(record.credit)


def aggregate(records: Iterable[CourseRecord]) -> Totals:
    """
    Credit-weighted averages over the countable records.

    Records with a missing/out-of-range score or a non-positive credit are
    skipped. With no countable credit both averages are None.
    """
    countable = [r for r in records if is_countable(r)]
    if not countable:
        return _EMPTY_TOTALS

    scores = np.array([r.score for r in countable], dtype=float)
    credits = np.array([r.credit for r in countable], dtype=float)
    secondary = np.array([to_secondary_grade(r.score) for r in countable], dtype=float)

    total_credits = float(credits.sum())
    if total_credits == 0:
        return Totals(total_credits=0.0, weighted_score=None, weighted_secondary=None, count=len(countable))

    return Totals(
        total_credits=total_credits,
        weighted_score=float(np.dot(scores, credits) / total_credits),
        weighted_secondary=float(np.dot(secondary, credits) / total_credits),
        count=len(countable),
    )


def rescale_gpa(average: Optional[float], target_scale: float) -> Optional[float]:
    """
    Map a 0-100 average onto [0, target_scale]. Inputs outside [0, 100] are
    clamped first. A missing or non-finite average or scale gives None.
    """
    if average is None or target_scale is None:
        return None
    try:
        average = float(average)
        target_scale = float(target_scale)
    except OverflowError:
        return None
    if not (math.isfinite(average) and math.isfinite(target_scale)):
        return None

    clamped = min(SCORE_MAX, max(SCORE_MIN, average))
    return clamped / SCORE_MAX * target_scale


# ------------------------
# Display helpers
# ------------------------
def round_half_up(x: float, digits: int = 2) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(x)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_number(value: Optional[float], digits: int = 2) -> str:
    if value is None:
        return "—"
    return f"{round_half_up(value, digits):.{digits}f}"
