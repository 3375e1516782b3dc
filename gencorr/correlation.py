"""Trimmed Spearman correlation matrix between two residual sequences.

The trimming range [tau_min, tau_max] is cut into q equal-width bands and
one PhiFunc is built per band.  For residual samples U1, U2 of length n the
correlation is the q x q matrix

    rho[i, j] = mean_k  phi_i(U1[k]) * phi_j(U2[k]),

a plug-in estimate of the cross-correlation between the band-wise rank
contrasts of the two sequences.  It is not symmetric in general.

Key notation:
  - Phi1 : (q, n) matrix with rows phi_i(U1)
  - Phi2 : (q, n) matrix with rows phi_j(U2)
  - rho  = Phi1 @ Phi2' / n
"""

import logging
from numbers import Integral
from typing import Optional, Tuple

import numpy as np

from gencorr.config import DEFAULT_TAU_MAX, DEFAULT_TAU_MIN
from gencorr.trimming import PhiFunc
from gencorr.utils import Quadrature, as_residuals

logger = logging.getLogger(__name__)


def validate_tau_params(tau_min: float, tau_max: float) -> None:
    """Check 0 < tau_min < tau_max < 1."""
    if not (0 < tau_min < 1):
        raise ValueError(f"tau_min must be in (0, 1), got {tau_min}")
    if not (0 < tau_max < 1):
        raise ValueError(f"tau_max must be in (0, 1), got {tau_max}")
    if not (tau_min < tau_max):
        raise ValueError(f"tau_min must be less than tau_max, got tau_min={tau_min}, tau_max={tau_max}")


def validate_q(q) -> int:
    """Return *q* as an int, or raise if it is not a positive integer."""
    if isinstance(q, bool) or not isinstance(q, Integral) or q < 1:
        raise ValueError(f"q must be a positive integer, got {q!r}")
    return int(q)


class TrimmedSpearmanCorrelation:
    """Band-wise trimmed Spearman correlation.

    Parameters
    ----------
    q : int
        Number of equal-width bands.
    tau_min, tau_max : float
        Trimming range, 0 < tau_min < tau_max < 1.
    quad : callable, optional
        Quadrature collaborator forwarded to every PhiFunc.

    Raises
    ------
    ValueError
        On invalid q or tau bounds.
    NumericalInstabilityError
        If any band is too narrow for its basis constants to be finite.
    """

    def __init__(
        self,
        q: int,
        tau_min: float = DEFAULT_TAU_MIN,
        tau_max: float = DEFAULT_TAU_MAX,
        *,
        quad: Optional[Quadrature] = None,
    ):
        q = validate_q(q)
        validate_tau_params(tau_min, tau_max)

        self._q = q
        self._tau_min = float(tau_min)
        self._tau_max = float(tau_max)

        # q + 1 breakpoints -> q adjacent bands [tau_{i-1}, tau_i]
        tau = np.linspace(self._tau_min, self._tau_max, q + 1)
        self._breakpoints = tau
        self._breakpoints.setflags(write=False)
        self._phis: Tuple[PhiFunc, ...] = tuple(
            PhiFunc(tau[i], tau[i + 1], quad=quad) for i in range(q)
        )
        logger.debug(
            "TrimmedSpearmanCorrelation: q=%d on [%.4g, %.4g]",
            q, self._tau_min, self._tau_max,
        )

    @property
    def q(self) -> int:
        return self._q

    @property
    def tau_min(self) -> float:
        return self._tau_min

    @property
    def tau_max(self) -> float:
        return self._tau_max

    @property
    def breakpoints(self) -> np.ndarray:
        return self._breakpoints

    @property
    def phis(self) -> Tuple[PhiFunc, ...]:
        return self._phis

    def transform(self, U) -> np.ndarray:
        """Return the (q, n) matrix whose i-th row is phi_i applied to *U*."""
        U = np.asarray(U, dtype=np.float64)
        Phi = np.empty((self._q, U.shape[0]), dtype=np.float64)
        for i, phi in enumerate(self._phis):
            Phi[i] = phi.evaluate(U)
        return Phi

    def evaluate(self, U1, U2) -> np.ndarray:
        """Correlation matrix between two equal-length residual sequences.

        Parameters
        ----------
        U1, U2 : (n,) array-like
            Generalized residuals.

        Returns
        -------
        (q, q) float64 array with entry [i, j] = mean(phi_i(U1) * phi_j(U2)).
        """
        U1 = as_residuals(U1, name="U1")
        U2 = as_residuals(U2, name="U2")
        if U1.shape[0] != U2.shape[0]:
            raise ValueError(
                f"U1 and U2 must have the same length, got {U1.shape[0]} and {U2.shape[0]}"
            )
        n = U1.shape[0]
        if n == 0:
            raise ValueError("Need at least one observation.")

        Phi1 = self.transform(U1)
        Phi2 = self.transform(U2)
        return (Phi1 @ Phi2.T) / n

    def __repr__(self):
        return (
            f"TrimmedSpearmanCorrelation(q={self._q}, tau_min={self._tau_min!r}, "
            f"tau_max={self._tau_max!r})"
        )
