# SPDX-License-Identifier: MIT
"""Mean absolute error stratified by fixed price bands.

Samples are assigned to a band by their *actual* value.  Band ``i`` covers
``(PRICE_SEGMENT_BOUNDARIES[i - 1], PRICE_SEGMENT_BOUNDARIES[i]]``; the first
band has no lower bound, so it also collects zero and negative actuals.
Actuals above the last boundary (and NaN actuals) belong to no band and do
not contribute to any MAE.

A band without samples reports ``None`` rather than ``0.0`` so that an empty
band is never mistaken for a perfect one.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np
import pandas as pd

from priceeval.utils.logging import get_logger

from .validation import paired_float_arrays, sequential_sum

PRICE_SEGMENT_BOUNDARIES: tuple[float, ...] = (
    10_000.0,
    25_000.0,
    50_000.0,
    75_000.0,
    100_000.0,
)

_logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SegmentResult:
    """One price band and the error observed inside it."""

    upper_bound: float
    lower_bound: Optional[float]
    mae: Optional[float]
    count: int

    @property
    def has_data(self) -> bool:
        return self.mae is not None

    def contains(self, value: float) -> bool:
        """Return ``True`` when ``value`` falls into this band."""

        if not value <= self.upper_bound:
            return False
        return self.lower_bound is None or value > self.lower_bound


@dataclass(frozen=True, slots=True)
class SegmentedMAE:
    """Per-band MAE aligned with :attr:`segments`."""

    segments: tuple[float, ...]
    mae: tuple[Optional[float], ...]
    counts: tuple[int, ...]
    excluded: int = 0

    def __post_init__(self) -> None:
        if not len(self.segments) == len(self.mae) == len(self.counts):
            raise ValueError("segments, mae and counts must be aligned")

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[SegmentResult]:
        return iter(self.results())

    def results(self) -> tuple[SegmentResult, ...]:
        lowers: list[Optional[float]] = [None, *self.segments[:-1]]
        return tuple(
            SegmentResult(upper_bound=upper, lower_bound=lower, mae=mae, count=count)
            for upper, lower, mae, count in zip(self.segments, lowers, self.mae, self.counts)
        )

    def as_dict(self) -> dict[str, list[Optional[float]]]:
        """Return the ``{"segments": [...], "mae": [...]}`` mapping."""

        return {"segments": list(self.segments), "mae": list(self.mae)}

    def to_frame(self) -> pd.DataFrame:
        """Tabulate the bands; empty bands show ``NaN`` in the ``mae`` column."""

        rows = [
            {
                "lower_bound": np.nan if result.lower_bound is None else result.lower_bound,
                "upper_bound": result.upper_bound,
                "mae": np.nan if result.mae is None else result.mae,
                "count": result.count,
            }
            for result in self.results()
        ]
        return pd.DataFrame(rows, columns=["lower_bound", "upper_bound", "mae", "count"])


def segment_mask(actual: np.ndarray, index: int, boundaries: Sequence[float]) -> np.ndarray:
    """Boolean mask of samples whose actual value lies in band ``index``."""

    mask = actual <= boundaries[index]
    if index > 0:
        mask &= actual > boundaries[index - 1]
    return mask


def segmented_mae(predicted: Iterable[float], actual: Iterable[float]) -> SegmentedMAE:
    """Compute the MAE of ``predicted`` within each fixed price band.

    Raises :class:`~priceeval.metrics.validation.LengthMismatchError` when the
    sequences differ in length.  Empty input is valid and yields ``None`` for
    every band.
    """

    pred, true = paired_float_arrays(predicted, actual)
    abs_errors = np.abs(pred - true)
    boundaries = PRICE_SEGMENT_BOUNDARIES

    maes: list[Optional[float]] = []
    counts: list[int] = []
    for index in range(len(boundaries)):
        in_band = abs_errors[segment_mask(true, index, boundaries)]
        count = int(in_band.size)
        counts.append(count)
        maes.append(sequential_sum(in_band) / count if count else None)

    excluded = int(true.size) - sum(counts)
    if excluded:
        _logger.debug(
            "segmented_mae excluded samples outside the price bands",
            excluded=excluded,
            upper_limit=boundaries[-1],
        )

    return SegmentedMAE(
        segments=boundaries,
        mae=tuple(maes),
        counts=tuple(counts),
        excluded=excluded,
    )


__all__ = [
    "PRICE_SEGMENT_BOUNDARIES",
    "SegmentResult",
    "SegmentedMAE",
    "segment_mask",
    "segmented_mae",
]
