# SPDX-License-Identifier: MIT
"""Accuracy metrics for price predictions.

``relative_error_ratio`` reduces a prediction run to its mean relative error;
``segmented_mae`` breaks the mean absolute error out by fixed price bands.
"""

from .metrics import (
    PRICE_SEGMENT_BOUNDARIES,
    EmptyInputError,
    LengthMismatchError,
    PriceAccuracyReport,
    PriceMetricsError,
    SegmentedMAE,
    SegmentResult,
    evaluate_price_accuracy,
    relative_error_ratio,
    segmented_mae,
)

__version__ = "0.1.0"

__all__ = [
    "PRICE_SEGMENT_BOUNDARIES",
    "EmptyInputError",
    "LengthMismatchError",
    "PriceAccuracyReport",
    "PriceMetricsError",
    "SegmentResult",
    "SegmentedMAE",
    "evaluate_price_accuracy",
    "relative_error_ratio",
    "segmented_mae",
]
