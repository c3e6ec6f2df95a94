"""Blood pressure classification labels and their display colour tiers."""

from enum import Enum
from typing import Any, Optional


class Classification(str, Enum):
    """Labels the server assigns to a reading."""

    NORMAL = "Normal"
    ELEVATED = "Elevated"
    HYPERTENSION_STAGE_1 = "Hypertension Stage 1"
    HYPERTENSION_STAGE_2 = "Hypertension Stage 2"
    HYPERTENSIVE_CRISIS = "Hypertensive Crisis"


class ColorTier(str, Enum):
    """Display intensity tiers, mildest first."""

    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"
    PURPLE = "purple"
    NEUTRAL = "gray"


_TIERS = {
    Classification.NORMAL: ColorTier.GREEN,
    Classification.ELEVATED: ColorTier.YELLOW,
    Classification.HYPERTENSION_STAGE_1: ColorTier.ORANGE,
    Classification.HYPERTENSION_STAGE_2: ColorTier.RED,
    Classification.HYPERTENSIVE_CRISIS: ColorTier.PURPLE,
}

_BY_LOWER = {c.value.lower(): c for c in Classification}


def parse_classification(label: Any) -> Optional[Classification]:
    """Case-insensitive lookup of a server label; None when unknown."""
    if not isinstance(label, str):
        return None
    return _BY_LOWER.get(label.strip().lower())


def classification_color(label: Any) -> ColorTier:
    """Map a classification label to its colour tier.

    Total: unknown labels, empty strings and non-string input all get
    ColorTier.NEUTRAL.
    """
    classification = parse_classification(label)
    if classification is None:
        return ColorTier.NEUTRAL
    return _TIERS[classification]
