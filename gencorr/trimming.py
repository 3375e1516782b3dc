"""Trimming functions and the centred, scaled basis built on them.

A trimming function sigma approximates the normalized indicator of a
quantile band [mu, lam]:

              K  +        ______________
                 |       /              \\
                 |      /                \\
              0  +-----+--+-----------+--+-----
                      mu  mu+delta  lam-delta  lam

with linear ramps of width delta at both edges and plateau height
K = 1 / (lam - mu - delta), so that sigma integrates to exactly one.

A PhiFunc turns sigma into a rank contrast

    phi(u) = c * (u - m) * sigma(u),
    m = int u sigma(u) du,
    c = 1 / sqrt(int (u - m)^2 sigma(u)^2 du),

which has zero mean and unit second moment when u is uniform on [0, 1].
The two integrals are computed once, at construction, by adaptive
quadrature.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from gencorr.config import DEFAULT_DELTA_FRACTION
from gencorr.utils import Quadrature, adaptive_quad

logger = logging.getLogger(__name__)


class NumericalInstabilityError(RuntimeError):
    """Raised when a basis constant comes out non-finite."""


def default_delta(mu: float, lam: float) -> float:
    """Ramp width used when none is given."""
    return DEFAULT_DELTA_FRACTION * (lam - mu) / 2


def validate_trimming_params(mu: float, lam: float, delta: float) -> None:
    """Check 0 <= mu < lam <= 1 and 0 <= delta <= (lam - mu) / 2."""
    if not (0 <= mu <= 1):
        raise ValueError(f"mu must be in [0, 1], got {mu}")
    if not (0 <= lam <= 1):
        raise ValueError(f"lam must be in [0, 1], got {lam}")
    if not (mu < lam):
        raise ValueError(f"mu must be less than lam, got mu={mu}, lam={lam}")
    if not (0 <= delta <= (lam - mu) / 2):
        raise ValueError(f"delta must be in [0, (lam - mu) / 2], got {delta}")


@dataclass(frozen=True)
class TrimmingFunc:
    """Lipschitz approximation of the normalized indicator of [mu, lam].

    Parameters
    ----------
    mu, lam : float
        Lower and upper trimming bounds, 0 <= mu < lam <= 1.
    delta : float or None
        Ramp width, 0 <= delta <= (lam - mu) / 2.  ``None`` selects
        ``DEFAULT_DELTA_FRACTION * (lam - mu) / 2``.
    """

    mu: float
    lam: float
    delta: Optional[float] = None
    K: float = field(init=False)

    def __post_init__(self):
        mu, lam = float(self.mu), float(self.lam)
        delta = default_delta(mu, lam) if self.delta is None else float(self.delta)
        validate_trimming_params(mu, lam, delta)

        # frozen dataclass: normalized values go through object.__setattr__
        object.__setattr__(self, "mu", mu)
        object.__setattr__(self, "lam", lam)
        object.__setattr__(self, "delta", delta)
        object.__setattr__(self, "K", 1.0 / (lam - mu - delta))

    def evaluate(self, u):
        """Evaluate sigma at *u* (scalar or array-like)."""
        mu, lam, delta, K = self.mu, self.lam, self.delta, self.K
        u = np.asarray(u, dtype=np.float64)

        # Ramp branches are unreachable when delta == 0; avoid 0/0 there.
        width = delta if delta > 0 else 1.0

        # Conditions are tested in order; the first match wins.
        out = np.select(
            [
                (mu + delta <= u) & (u <= lam - delta),
                (u < mu) | (u > lam),
                (mu <= u) & (u < mu + delta),
                (lam - delta < u) & (u <= lam),
            ],
            [
                K,
                0.0,
                K * (u - mu) / width,
                K * (lam - u) / width,
            ],
            default=0.0,
        )
        if out.ndim == 0:
            return float(out)
        return out


class PhiFunc:
    """Centred and scaled rank contrast on the band [mu, lam].

    Parameters
    ----------
    mu, lam : float
        Band bounds, validated as for ``TrimmingFunc``.
    quad : callable, optional
        ``quad(func, a, b) -> (value, abserr)``; defaults to
        ``gencorr.utils.adaptive_quad``.

    Raises
    ------
    ValueError
        If the bounds are invalid.
    NumericalInstabilityError
        If the centre ``m`` or the scale ``c`` is not finite, which happens
        when delta is too small relative to lam - mu.
    """

    def __init__(self, mu: float, lam: float, *, quad: Optional[Quadrature] = None):
        if quad is None:
            quad = adaptive_quad

        sigma = TrimmingFunc(mu, lam)
        mu, lam = sigma.mu, sigma.lam

        m = quad(lambda u: u * sigma.evaluate(u), mu, lam)[0]
        if not np.isfinite(m):
            raise NumericalInstabilityError("m is not finite, delta could be too small")

        second_moment = quad(lambda u: (u - m) ** 2 * sigma.evaluate(u) ** 2, mu, lam)[0]
        with np.errstate(divide="ignore", invalid="ignore"):
            c = 1.0 / np.sqrt(np.float64(second_moment))
        if not np.isfinite(c):
            raise NumericalInstabilityError("c is not finite, delta could be too small")

        self._m = float(m)
        self._c = float(c)
        self._sigma = sigma
        logger.debug("PhiFunc on [%.6g, %.6g]: m=%.6g, c=%.6g", mu, lam, self._m, self._c)

    @property
    def m(self) -> float:
        return self._m

    @property
    def c(self) -> float:
        return self._c

    @property
    def sigma(self) -> TrimmingFunc:
        return self._sigma

    def evaluate(self, u):
        """phi(u) = c * (u - m) * sigma(u), for scalar or array-like *u*."""
        u = np.asarray(u, dtype=np.float64)
        out = self._c * (u - self._m) * np.asarray(self._sigma.evaluate(u))
        if out.ndim == 0:
            return float(out)
        return out

    def __repr__(self):
        return (
            f"PhiFunc(mu={self._sigma.mu!r}, lam={self._sigma.lam!r}, "
            f"m={self._m!r}, c={self._c!r})"
        )
