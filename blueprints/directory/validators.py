from __future__ import annotations
import math
from typing import Optional

from errors import InvalidInput

# верхняя граница maximum_score
MAX_SCORE_LIMIT = 1e9

def require_name(value: Optional[str], field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidInput(f"{field} must not be empty")
    return cleaned

def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None

def require_positive(value: float, field: str) -> float:
    value = _finite(value, field)
    if value <= 0:
        raise InvalidInput(f"{field} must be > 0")
    if value > MAX_SCORE_LIMIT:
        raise InvalidInput(f"{field} must be <= {MAX_SCORE_LIMIT:g}")
    return value

def require_non_negative(value: float, field: str) -> float:
    value = _finite(value, field)
    if value < 0:
        raise InvalidInput(f"{field} must be >= 0")
    return value

def _finite(value, field: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{field} must be a number") from None
    if not math.isfinite(value):
        raise InvalidInput(f"{field} must be a finite number")
    return value
