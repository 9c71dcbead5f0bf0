"""
Similarity primitives — fuzzy string scoring and best-effort date normalization.

Both functions are pure and deterministic. Normalized values are used for
comparison only; they are never shown to the user or returned as data.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# ─── Constants ───────────────────────────────────────────────────────

CONTAINMENT_SCORE = 0.9

_WHITESPACE_RE = re.compile(r"\s+")
_PUNCTUATION_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
_DATE_SEPARATOR_RE = re.compile(r"[-/.]")


# ─── String Similarity ───────────────────────────────────────────────


def normalize_text(value: str) -> str:
    """Trim, lowercase, collapse whitespace, then strip punctuation."""
    collapsed = _WHITESPACE_RE.sub(" ", value.strip().lower())
    return _PUNCTUATION_RE.sub("", collapsed)


def levenshtein_distance(s1: str, s2: str) -> int:
    """Compute Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)
    if len(s2) == 0:
        return len(s1)
    prev = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        curr = [i + 1]
        for j, c2 in enumerate(s2):
            ins = prev[j + 1] + 1
            dele = curr[j] + 1
            sub = prev[j] + (0 if c1 == c2 else 1)
            curr.append(min(ins, dele, sub))
        prev = curr
    return prev[-1]


def similarity(a: Optional[str], b: Optional[str]) -> float:
    """Score how alike two strings are, from 0.0 (unrelated) to 1.0 (same).

    Scoring ladder, after normalization:
      1. Exact match            → 1.0
      2. One contains the other → 0.9 (middle name dropped, initials, etc.)
      3. Otherwise              → 1 - edit_distance / longest_length

    A missing value scores 0.0. Callers filter out documents lacking the
    field before comparing, so 0.0 never reaches a verdict by accident.
    """
    if not a or not b:
        return 0.0

    s1 = normalize_text(a)
    s2 = normalize_text(b)

    if s1 == s2:
        return 1.0

    if s1 in s2 or s2 in s1:
        return CONTAINMENT_SCORE

    max_length = max(len(s1), len(s2))
    if max_length == 0:
        return 1.0

    score = 1 - levenshtein_distance(s1, s2) / max_length
    return min(1.0, max(0.0, score))


# ─── Date Normalization ──────────────────────────────────────────────


def normalize_date(raw: str, log: Optional[logging.Logger] = None) -> str:
    """Best-effort canonicalization of a date string to YYYY-MM-DD.

    Accepts any of '-', '/', '.' as separator:
      - 4-character first part → year-month-day
      - 4-character last part  → day-month-year (day first, always)
      - anything else          → returned unchanged

    Day-first is a convention, not detection: "03/04/2020" is 3 April.
    Unrecognised input is returned as-is so comparison falls back to
    exact string equality. This function never raises.
    """
    log = log or logger
    try:
        parts = _DATE_SEPARATOR_RE.split(raw)
        if len(parts) != 3:
            return raw

        if len(parts[0]) == 4:
            year, month, day = parts
        elif len(parts[2]) == 4:
            day, month, year = parts
        else:
            return raw

        return f"{year}-{month.rjust(2, '0')}-{day.rjust(2, '0')}"
    except Exception as e:
        log.warning("Error normalizing date %r: %s", raw, e)
        return raw
