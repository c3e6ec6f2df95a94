"""Pydantic models and schemas."""

from bp_tracker.models.classification import (
    Classification,
    ColorTier,
    classification_color,
    parse_classification
)
from bp_tracker.models.reading import (
    READING_INPUT_FIELDS,
    Reading,
    ReadingInput
)
from bp_tracker.models.stats import (
    AveragePeriod,
    Stats
)

__all__ = [
    # Classification
    "Classification",
    "ColorTier",
    "classification_color",
    "parse_classification",

    # Reading models
    "READING_INPUT_FIELDS",
    "Reading",
    "ReadingInput",

    # Stats models
    "AveragePeriod",
    "Stats"
]
