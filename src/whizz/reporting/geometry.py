"""Planar geometry helpers for survey lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike


def _distance(x: ArrayLike, y: ArrayLike) -> np.ndarray:
    """The length of the hypotenuse of the triangle with other side lengths ``x`` and ``y``."""
    return np.hypot(x, y)


def linelength(x: ArrayLike, y: ArrayLike) -> float:
    """Length of the polyline through points ``(x, y)``.

    >>> linelength([0.0, 3.0, 3.0], [0.0, 4.0, 10.0])
    11.0
    """
    x = np.asarray(x, dtype="float64")
    y = np.asarray(y, dtype="float64")
    if x.shape != y.shape:
        err = f"x and y must have the same shape, got {x.shape} and {y.shape}"
        raise ValueError(err)
    if x.size < 2:  # noqa: PLR2004
        return 0.0
    return float(np.nansum(_distance(np.diff(x), np.diff(y))))


def mask_missing(values: ArrayLike, missing_value: float) -> np.ndarray:
    """Float copy of ``values`` with the missing value replaced by NaN."""
    values = np.array(values, dtype="float64")
    values[values == missing_value] = np.nan
    return values
