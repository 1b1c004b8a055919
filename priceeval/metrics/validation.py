# SPDX-License-Identifier: MIT
"""Input validation shared by the price accuracy metrics.

Both metrics consume two index-aligned sequences of floats.  The helpers
below coerce them into one-dimensional ``float64`` arrays and fail fast with
typed errors instead of letting NumPy broadcast mismatched inputs.
"""
from __future__ import annotations

from typing import Iterable

import numpy as np


class PriceMetricsError(ValueError):
    """Base class for invalid inputs passed to the price metrics."""


class LengthMismatchError(PriceMetricsError):
    """Raised when predicted and actual sequences differ in length."""

    def __init__(self, predicted_length: int, actual_length: int) -> None:
        self.predicted_length = predicted_length
        self.actual_length = actual_length
        super().__init__(
            "predicted and actual must have the same length "
            f"(got {predicted_length} and {actual_length})"
        )


class EmptyInputError(PriceMetricsError):
    """Raised when a metric that averages over all samples receives none."""


def _as_float_vector(values: Iterable[float], name: str) -> np.ndarray:
    if isinstance(values, (str, bytes)):
        raise PriceMetricsError(f"{name} must be a sequence of numbers, not text")
    try:
        raw = values if isinstance(values, np.ndarray) else np.asarray(list(values))
    except (TypeError, ValueError) as exc:
        raise PriceMetricsError(f"{name} must be a sequence of numbers") from exc
    # numeric strings would otherwise be parsed by the float cast
    if raw.dtype.kind not in "biuf":
        raise PriceMetricsError(f"{name} must contain only numeric values")
    array = raw.astype(float)
    if array.ndim != 1:
        raise PriceMetricsError(
            f"{name} must be one-dimensional (got shape {array.shape})"
        )
    return array


def paired_float_arrays(
    predicted: Iterable[float], actual: Iterable[float]
) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(predicted, actual)`` as aligned 1-D float arrays.

    Raises :class:`LengthMismatchError` when the sequences are not the same
    length.  Empty inputs are returned as-is; whether they are acceptable is
    up to the calling metric.
    """

    pred = _as_float_vector(predicted, "predicted")
    true = _as_float_vector(actual, "actual")
    if pred.size != true.size:
        raise LengthMismatchError(int(pred.size), int(true.size))
    return pred, true


def sequential_sum(values: np.ndarray) -> float:
    """Sum ``values`` strictly left to right.

    ``np.sum`` uses pairwise summation, so its rounding differs from a plain
    running total.  ``np.cumsum`` accumulates in index order.
    """

    if values.size == 0:
        return 0.0
    return float(np.cumsum(values)[-1])


__all__ = [
    "EmptyInputError",
    "LengthMismatchError",
    "PriceMetricsError",
    "paired_float_arrays",
    "sequential_sum",
]
