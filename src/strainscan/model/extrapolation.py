""" Fractal frequency-size extrapolation of the heave carried by faults too small to observe.

Ranking the heaves h in descending order gives a power law ``rank ~ h^C`` over the range where the
population is completely sampled. Below the smallest sampled heave ``hn`` the population is
extended to zero size along the same law; summing the extended tail gives

    he = hn * (D / (1 - D)) * (N + 1) * (N / (N + 1)) ** (1 / D)

with ``D = -C`` the fractal exponent magnitude and ``N`` the number of faults in the window. The
tail sum only converges for 0 < D < 1.
"""

import logging
import warnings

import numpy as np
import pandas as pd
from scipy import stats

from strainscan.model.errors import InputSchemaViolation, InvalidExtrapolationModel
from strainscan.model.faults import FractalFit

log = logging.getLogger("StrainScan")

# Columns of the ranked heave table
RANKED_HEAVE = "heave"
RANK = "rank"
LOG_HEAVE = "logHeave"
LOG_RANK = "logRank"


def rank_heaves(heaves):
    """
    Rank heaves in descending order, 1-indexed, ties kept in input order.

    Undefined (NaN) heaves are dropped before ranking. Zero heaves (bounding faults) are ranked
    last with a log heave of -inf.

    Parameters
    ----------
    heaves : array-like or pd.Series
        Heaves in transect order.

    Returns
    -------
    pd.DataFrame
        Columns ``heave``, ``rank``, ``logHeave`` and ``logRank``, sorted by rank. The index is that
        of the input series, or the input position.
    """
    heaves = pd.Series(heaves, dtype=float)
    dropped = int(heaves.isna().sum())
    if dropped:
        log.warning(f"{dropped} undefined heaves left out of the frequency-size ranking")
    heaves = heaves.dropna()

    # mergesort is stable, so equal heaves keep their input order
    ranked = heaves.sort_values(ascending=False, kind="mergesort").to_frame(RANKED_HEAVE)
    ranked[RANK] = np.arange(1, len(ranked) + 1)
    with np.errstate(divide="ignore", invalid="ignore"):
        ranked[LOG_HEAVE] = np.log(ranked[RANKED_HEAVE].to_numpy())
    ranked[LOG_RANK] = np.log(ranked[RANK].to_numpy(dtype=float))
    return ranked


def extrapolated_heave(slope, smallest_heave, n_window):
    """
    Heave contributed by the unobserved faults smaller than ``smallest_heave``.

    Parameters
    ----------
    slope : float
        Regression slope C of log(rank) against log(heave). Must lie in (-1, 0).
    smallest_heave : float
        Smallest heave hn inside the regression window.
    n_window : int
        Number of faults N in the regression window.

    Returns
    -------
    float
        The extrapolated heave he.
    """
    if not slope < 0:
        raise InvalidExtrapolationModel(
            f"Regression slope C = {slope:.4g} is not negative; larger faults are not rarer "
            "and no small fault correction can be computed."
        )
    D = -slope
    if D >= 1:
        raise InvalidExtrapolationModel(
            f"Regression slope C = {slope:.4g} gives a fractal exponent of at least one; "
            "the small fault tail does not converge."
        )
    N = n_window
    return float(smallest_heave * (D / (1 - D)) * (N + 1) * (N / (N + 1)) ** (1 / D))


class SmallFaultExtrapolator:
    """
    Fit the frequency-size power law over an analyst chosen rank window and extrapolate it.

    Parameters
    ----------
    window : tuple of int
        Inclusive 1-indexed rank window ``(lo, hi)`` on the linear part of the log-log plot.
    min_slope : float, optional
        Smallest accepted magnitude of the slope C. Flatter fits make 1/C numerically unstable and
        are refused. Default is 1e-3.
    """

    def __init__(self, window, min_slope=1e-3):
        try:
            lo, hi = (int(w) for w in window)
        except (TypeError, ValueError):
            raise InputSchemaViolation(f"Regression window must be a pair of ranks, got {window!r}.")
        if lo < 1 or hi <= lo:
            raise InputSchemaViolation(f"Regression window must satisfy 1 <= lo < hi, got ({lo}, {hi}).")
        self.window = (lo, hi)
        self.min_slope = min_slope

    def __str__(self):
        return f"SmallFaultExtrapolator: ranks {self.window[0]}-{self.window[1]}"

    def run(self, heaves):
        """
        Rank the heaves, fit the window and compute the extrapolated heave.

        Parameters
        ----------
        heaves : array-like or pd.Series
            Heaves of the full fault set, bounding faults included.

        Returns
        -------
        FractalFit
            The regression and the extrapolated heave he.

        Raises
        ------
        InputSchemaViolation
            If the window does not fit the ranked heaves or holds non-positive heaves.
        InvalidExtrapolationModel
            If the slope is not negative, is too flat, or gives a diverging tail.
        """
        ranked = rank_heaves(heaves)
        lo, hi = self.window
        if hi > len(ranked):
            raise InputSchemaViolation(f"Regression window ({lo}, {hi}) exceeds the {len(ranked)} ranked heaves.")

        sample = ranked.iloc[lo - 1 : hi]
        if (sample[RANKED_HEAVE] <= 0).any():
            raise InputSchemaViolation(f"Regression window ({lo}, {hi}) includes zero or negative heaves.")
        n_window = len(sample)
        if n_window < 3:
            warnings.warn(f"Regression window ({lo}, {hi}) holds only {n_window} faults; the fit is exact.")
        if sample[LOG_HEAVE].nunique() < 2:
            raise InvalidExtrapolationModel(
                f"All heaves in ranks {lo}-{hi} are equal; the regression slope C is undefined."
            )

        fit = stats.linregress(sample[LOG_HEAVE].to_numpy(), sample[LOG_RANK].to_numpy())
        slope = float(fit.slope)
        log.info(f"Frequency-size fit over ranks {lo}-{hi}: C = {slope:.4f}, r = {fit.rvalue:.4f}")

        if slope < 0 and abs(slope) < self.min_slope:
            raise InvalidExtrapolationModel(
                f"Regression slope C = {slope:.4g} is flatter than {self.min_slope:g}; 1/C is unstable."
            )

        smallest = float(sample[RANKED_HEAVE].min())
        extrapolated = extrapolated_heave(slope, smallest, n_window)
        log.info(f"Extrapolated small fault heave he = {extrapolated:.4f} below hn = {smallest:.4f}")

        return FractalFit(
            slope=slope,
            intercept=float(fit.intercept),
            rvalue=float(fit.rvalue),
            window=self.window,
            n_window=n_window,
            smallest_heave=smallest,
            extrapolated=extrapolated,
            ranked=ranked,
        )
