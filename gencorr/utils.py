"""Numerical collaborators and input handling shared across the package.

Provides the two external building blocks the pipeline depends on, plus
the residual coercion used by the correlation and the test:

* **Adaptive quadrature** -- ``adaptive_quad(func, a, b)`` integrates a
  scalar function over a finite interval and returns ``(value, abserr)``.
  Used twice per basis function (centre and scale).
* **Chi-squared survival function** -- ``chi2_sf(x, df)`` returns the
  upper-tail probability P(X > x) for X ~ chi2(df).  Used once per
  p-value.
* **Residual coercion** -- ``as_residuals`` turns any 1-D sequence into a
  read-only float64 array and warns about values a generalized residual
  should not take.

Both collaborators are plain callables so that callers (and tests) can
substitute any function with the same signature.
"""

import logging
from typing import Callable, Tuple

import numpy as np
from scipy import integrate, stats

from gencorr.config import QUAD_EPSABS, QUAD_EPSREL, QUAD_LIMIT

logger = logging.getLogger(__name__)

# (func, a, b) -> (integral, absolute error estimate)
Quadrature = Callable[[Callable[[float], float], float, float], Tuple[float, float]]

# (x, df) -> P(X > x)
SurvivalFunction = Callable[[float, int], float]


def adaptive_quad(func: Callable[[float], float], a: float, b: float) -> Tuple[float, float]:
    """Integrate *func* over the finite interval [a, b].

    Thin wrapper around ``scipy.integrate.quad`` (QUADPACK's adaptive
    Gauss-Kronrod scheme) with the tolerances from ``gencorr.config``.

    Returns
    -------
    (value, abserr) : tuple of float
    """
    value, abserr = integrate.quad(
        func, a, b, epsabs=QUAD_EPSABS, epsrel=QUAD_EPSREL, limit=QUAD_LIMIT
    )
    return float(value), float(abserr)


def chi2_sf(x: float, df: int) -> float:
    """Upper-tail probability of a chi-squared(df) distribution at *x*."""
    return float(stats.chi2.sf(x, df))


def as_residuals(U, *, name: str = "U") -> np.ndarray:
    """Coerce *U* to a read-only 1-D float64 array.

    Non-finite entries and values outside [0, 1] are reported with a
    warning but kept: the downstream transforms are defined on the whole
    real line (they vanish outside the trimming range), so the result is
    still well defined.
    """
    arr = np.array(U, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {arr.shape}")

    if not np.all(np.isfinite(arr)):
        logger.warning("%s contains NaN/Inf; results may be undefined.", name)
    elif arr.size and (arr.min() < 0.0 or arr.max() > 1.0):
        logger.warning("%s has values outside [0, 1]; generalized residuals are expected in the unit interval.", name)

    arr.setflags(write=False)
    return arr
