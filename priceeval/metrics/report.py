# SPDX-License-Identifier: MIT
"""Combined price accuracy report."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from priceeval.config.settings import PriceEvalSettings
from priceeval.utils.logging import get_logger

from .relative_error import relative_error_ratio
from .segments import SegmentedMAE, segmented_mae
from .validation import paired_float_arrays

_logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PriceAccuracyReport:
    """Both accuracy metrics computed over the same sample pairs."""

    samples: int
    relative_error_ratio: float
    segmented: SegmentedMAE

    def as_dict(self) -> dict[str, Any]:
        return {
            "samples": self.samples,
            "relative_error_ratio": self.relative_error_ratio,
            **self.segmented.as_dict(),
        }


def evaluate_price_accuracy(
    predicted: Iterable[float],
    actual: Iterable[float],
    *,
    settings: Optional[PriceEvalSettings] = None,
) -> PriceAccuracyReport:
    """Compute :func:`relative_error_ratio` and :func:`segmented_mae` together.

    ``settings.empty_input_policy`` decides whether empty input raises
    :class:`~priceeval.metrics.validation.EmptyInputError` or produces a NaN
    ratio.  Without explicit settings the strict ``"raise"`` policy applies.
    """

    pred, true = paired_float_arrays(predicted, actual)
    policy = settings.empty_input_policy if settings is not None else "raise"

    with _logger.operation(
        "evaluate_price_accuracy", level=logging.DEBUG, samples=int(true.size)
    ) as op:
        ratio = relative_error_ratio(pred, true, empty_policy=policy)
        segmented = segmented_mae(pred, true)
        op["relative_error_ratio"] = ratio
        op["excluded"] = segmented.excluded

    return PriceAccuracyReport(
        samples=int(true.size),
        relative_error_ratio=ratio,
        segmented=segmented,
    )


__all__ = ["PriceAccuracyReport", "evaluate_price_accuracy"]
