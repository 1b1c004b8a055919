# SPDX-License-Identifier: MIT
"""Mean relative error of price predictions."""
from __future__ import annotations

from typing import Iterable, Literal

import numpy as np

from priceeval.utils.logging import get_logger

from .validation import EmptyInputError, paired_float_arrays, sequential_sum

EmptyInputPolicy = Literal["raise", "nan"]

_logger = get_logger(__name__)


def relative_error_ratio(
    predicted: Iterable[float],
    actual: Iterable[float],
    *,
    empty_policy: EmptyInputPolicy = "raise",
) -> float:
    """Return ``(1/n) * sum(|predicted[i] - actual[i]| / actual[i])``.

    Parameters
    ----------
    predicted, actual:
        Index-aligned sequences of equal length.
    empty_policy:
        ``"raise"`` (default) rejects empty input with
        :class:`~priceeval.metrics.validation.EmptyInputError`.  ``"nan"``
        returns ``nan`` instead, matching the historical behaviour.

    A zero in ``actual`` yields an infinite (or NaN, when the prediction is
    also zero) term that propagates into the result.  This is reported with a
    warning but not masked.
    """

    if empty_policy not in ("raise", "nan"):
        raise ValueError(f"unknown empty_policy: {empty_policy!r}")

    pred, true = paired_float_arrays(predicted, actual)
    n = int(true.size)
    if n == 0:
        if empty_policy == "raise":
            raise EmptyInputError("relative_error_ratio requires at least one sample")
        _logger.warning("relative_error_ratio received no samples; returning NaN")
        return float("nan")

    zero_actuals = int(np.count_nonzero(true == 0.0))
    if zero_actuals:
        _logger.warning(
            "relative_error_ratio received zero-valued actuals; result is not finite",
            zero_actuals=zero_actuals,
            samples=n,
        )

    with np.errstate(divide="ignore", invalid="ignore"):
        terms = np.abs(pred - true) / true
    return sequential_sum(terms) / n


__all__ = ["EmptyInputPolicy", "relative_error_ratio"]
