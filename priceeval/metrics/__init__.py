# SPDX-License-Identifier: MIT

"""Expose price accuracy metrics for external consumers."""

from .relative_error import EmptyInputPolicy, relative_error_ratio
from .report import PriceAccuracyReport, evaluate_price_accuracy
from .segments import (
    PRICE_SEGMENT_BOUNDARIES,
    SegmentedMAE,
    SegmentResult,
    segmented_mae,
)
from .validation import EmptyInputError, LengthMismatchError, PriceMetricsError

__all__ = [
    "PRICE_SEGMENT_BOUNDARIES",
    "EmptyInputError",
    "EmptyInputPolicy",
    "LengthMismatchError",
    "PriceAccuracyReport",
    "PriceMetricsError",
    "SegmentResult",
    "SegmentedMAE",
    "evaluate_price_accuracy",
    "relative_error_ratio",
    "segmented_mae",
]
