# risk_scanner/classify.py
from enum import Enum
from typing import Optional


class RiskCategory(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# Checked in order; first match wins.
_KEYWORDS = (
    (RiskCategory.HIGH, ("alto", "high")),
    (RiskCategory.MEDIUM, ("medio", "medium")),
)


def classify(risk_level: Optional[str]) -> RiskCategory:
    """
    Map the service's free-text risk label to a severity tier.

    Matching is a case-insensitive substring test, so "not-high-risk"
    still lands in HIGH. Anything unmatched (or missing) is LOW.
    """
    text = (risk_level or "").lower()

    for category, words in _KEYWORDS:
        if any(w in text for w in words):
            return category

    return RiskCategory.LOW
