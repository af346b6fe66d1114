""" Search for the azimuth of maximum elongation over a fault population."""

import logging

import numpy as np
import pandas as pd

from strainscan.model.errors import InputSchemaViolation
from strainscan.model.faults import DIP_DIRECTION, ElongationDirection

log = logging.getLogger("StrainScan")

# Ratios this close to the maximum are ties
TIE_TOLERANCE = 1e-12


def direction_curve(dip_directions, step=1):
    """
    Score every candidate azimuth by the average apparent offset ratio of the faults.

    For a candidate azimuth s the ratio of a fault is |cos(dipDirection - s)|. The sweep runs over
    0..180 degrees inclusive; strike is directionless, so 180 repeats 0.

    Parameters
    ----------
    dip_directions : array-like
        Dip directions (slip trends) in degrees. NaN entries are ignored.
    step : int, optional
        Integer degree step of the sweep, a divisor of 180. Default is 1.

    Returns
    -------
    pd.DataFrame
        Columns ``azimuth`` and ``ratio``, one row per candidate azimuth.
    """
    dip_directions = np.asarray(dip_directions, dtype=float).ravel()
    dip_directions = dip_directions[~np.isnan(dip_directions)]
    if dip_directions.size == 0:
        raise InputSchemaViolation("No dip directions to search for an elongation direction.")
    if int(step) != step or step < 1 or 180 % int(step) != 0:
        raise InputSchemaViolation(f"Azimuth step must be a positive integer divisor of 180, got {step}.")

    azimuths = np.arange(0, 181, int(step), dtype=float)
    # Rows are candidate azimuths, columns are faults
    ratios = np.abs(np.cos(np.radians(dip_directions[np.newaxis, :] - azimuths[:, np.newaxis])))
    return pd.DataFrame({"azimuth": azimuths, "ratio": ratios.mean(axis=1)})


def first_maximum(curve, tolerance=TIE_TOLERANCE):
    """
    Return the (azimuth, ratio) of the lowest azimuth whose ratio ties the maximum of a curve.

    Rounding in the sweep can separate ratios that are equal analytically, so any ratio within
    ``tolerance`` of the maximum is a tie. The azimuth is folded into [0, 180).
    """
    ratios = curve["ratio"].to_numpy(dtype=float)
    best = int(np.flatnonzero(np.isclose(ratios, ratios.max(), rtol=0, atol=tolerance))[0])
    return float(curve["azimuth"].iloc[best]) % 180.0, float(ratios[best])


def find_elongation_direction(faults, step=1):
    """
    Find the azimuth of maximum elongation by a brute force sweep.

    The average ratio is not guaranteed to be unimodal, so every candidate is scored. Ties resolve to
    the lowest azimuth.

    Parameters
    ----------
    faults : pd.DataFrame or array-like
        A fault table with a ``dipDirection`` column, or the dip directions themselves.
    step : int, optional
        Integer degree step of the sweep. Default is 1.

    Returns
    -------
    ElongationDirection
        The azimuth in [0, 180), its average ratio and the full curve.
    """
    if isinstance(faults, pd.DataFrame):
        if DIP_DIRECTION not in faults.columns:
            raise InputSchemaViolation(f"Fault table is missing required column '{DIP_DIRECTION}'.")
        dip_directions = faults[DIP_DIRECTION].to_numpy(dtype=float)
    else:
        dip_directions = faults

    curve = direction_curve(dip_directions, step=step)
    azimuth, ratio = first_maximum(curve)

    log.info(f"Maximum elongation azimuth {azimuth:.0f} with average ratio {ratio:.4f}")
    return ElongationDirection(azimuth=azimuth, ratio=ratio, curve=curve)
