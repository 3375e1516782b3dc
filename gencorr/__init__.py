"""
gencorr -- trimmed Spearman correlation tests of independence.

The "gencorr" package tests whether two sequences of generalized residuals
(values in [0, 1], e.g. probability-integral-transformed residuals of two
fitted models) are independent.  The trimming range is split into q quantile
bands, each band gets a centred and scaled rank contrast, and the q x q matrix
of cross-correlations between the contrasts of the two sequences is compared
against its chi-squared null distribution.

Key exports
-----------
TrimmingFunc, PhiFunc : classes
    Lipschitz trimming function on a band and the rank contrast built on it
    by adaptive quadrature.
TrimmedSpearmanCorrelation : class
    q-band trimmed Spearman correlation matrix between two residual vectors.
TrimmedSpearmanCorrelationTest : class
    The independence test: name, sample size, statistic and p-value.
trimmed_spearman_test : function
    Functional variant returning a TrimmedSpearmanResult.
IndependenceTest : protocol
    Structural interface shared by independence tests.
NumericalInstabilityError : exception
    Raised when a band is too narrow for its basis constants to be finite.
"""

from gencorr.trimming import TrimmingFunc, PhiFunc, NumericalInstabilityError
from gencorr.correlation import TrimmedSpearmanCorrelation
from gencorr.independence_test import (
    IndependenceTest,
    TrimmedSpearmanCorrelationTest,
    TrimmedSpearmanResult,
    trimmed_spearman_test,
)

__all__ = [
    "TrimmingFunc",
    "PhiFunc",
    "NumericalInstabilityError",
    "TrimmedSpearmanCorrelation",
    "IndependenceTest",
    "TrimmedSpearmanCorrelationTest",
    "TrimmedSpearmanResult",
    "trimmed_spearman_test",
]
