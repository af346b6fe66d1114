""" Per fault displacement geometry and the summed heave along an elongation azimuth."""

import logging

import numpy as np
import pandas as pd

from strainscan.config import load_config
from strainscan.model.displacement import apparent_displacements, true_displacements
from strainscan.model.errors import InputSchemaViolation
from strainscan.model.faults import (
    ACUTE_ANGLE_BED,
    ACUTE_ANGLE_ELONG,
    ACUTE_ANGLE_SCAN,
    ADJUSTED_BEDDING_DIP,
    APPARENT_DISPLACEMENT,
    BEDDING,
    BEDDING_DIP,
    BEDDING_PITCH,
    DIP,
    DIP_DIRECTION,
    ELONG_PITCH,
    ELONG_PLUNGE,
    HEAVE,
    LIN_PITCH,
    NUMBER,
    OFFSET,
    SCANLINE,
    SCANLINE_PITCH,
    STRIKE,
    TRUE_DISPLACEMENT,
    HeaveSummary,
    validate_azimuth,
    validate_fault_table,
)
from strainscan.model.util import (
    acute_angle,
    adjusted_dip,
    axial_difference,
    pitch_on_plane,
    plunge_of_pitch,
    vertical_section_pitch,
)

log = logging.getLogger("StrainScan")


class FaultSetProcessor:
    """
    Compute the heave of every fault along an elongation azimuth and sum them.

    The faults are used as given; selecting the faults near the elongation azimuth is the caller's
    decision (see `select_faults` and `faults_near_azimuth`). Faults whose geometry is degenerate
    get NaN derived values and are left out of the sum.

    Parameters
    ----------
    azimuth : float
        Elongation azimuth in degrees, [0, 360).
    pitch_tolerance : float, optional
        Denominator magnitude below which a pitch is undefined. Default is 1e-12.
    """

    def __init__(self, azimuth, pitch_tolerance=1e-12):
        self.azimuth = validate_azimuth(azimuth, name="Elongation azimuth")
        self.pitch_tolerance = pitch_tolerance

    def __str__(self):
        return f"FaultSetProcessor: azimuth {self.azimuth:.1f}"

    def run(self, faults):
        """
        Derive the displacement geometry of every fault and the total heave dF.

        Parameters
        ----------
        faults : pd.DataFrame
            Fault table following the input schema. It is not modified.

        Returns
        -------
        HeaveSummary
            The derived geometry table, dF and the number of excluded faults.
        """
        geometry = self.derive_geometry(faults)
        heaves = geometry[HEAVE].to_numpy()

        excluded = int(np.isnan(heaves).sum())
        total = float(np.nansum(heaves))
        if excluded:
            undefined = list(geometry.loc[geometry[HEAVE].isna(), NUMBER])
            log.warning(f"{excluded} of {len(geometry)} faults excluded with undefined heave: {undefined}")
        log.info(f"Added length dF = {total:.4f} along azimuth {self.azimuth:.1f} from {len(geometry) - excluded} faults")

        return HeaveSummary(
            azimuth=self.azimuth,
            geometry=geometry,
            total=total,
            n_faults=len(geometry),
            n_excluded=excluded,
        )

    def derive_geometry(self, faults):
        """Return a copy of the fault table with the derived geometry columns appended."""
        # Bounding faults without an offset are carried through as undefined heaves
        out = validate_fault_table(faults, require_offset=False)
        tol = self.pitch_tolerance

        strike = out[STRIKE].to_numpy()
        dip = out[DIP].to_numpy()

        out[ACUTE_ANGLE_BED] = acute_angle(strike, out[BEDDING].to_numpy())
        out[ACUTE_ANGLE_SCAN] = acute_angle(strike, out[SCANLINE].to_numpy())
        out[ACUTE_ANGLE_ELONG] = acute_angle(strike, np.full_like(strike, self.azimuth))
        out[ADJUSTED_BEDDING_DIP] = adjusted_dip(strike, out[BEDDING].to_numpy(), out[BEDDING_DIP].to_numpy())

        out[BEDDING_PITCH] = pitch_on_plane(dip, out[ADJUSTED_BEDDING_DIP].to_numpy(), out[ACUTE_ANGLE_BED].to_numpy(), tol)
        out[SCANLINE_PITCH] = vertical_section_pitch(dip, out[ACUTE_ANGLE_SCAN].to_numpy())

        out[TRUE_DISPLACEMENT] = true_displacements(
            out[LIN_PITCH].to_numpy(),
            out[BEDDING_PITCH].to_numpy(),
            out[SCANLINE_PITCH].to_numpy(),
            out[OFFSET].to_numpy(),
        )

        out[ELONG_PITCH] = vertical_section_pitch(dip, out[ACUTE_ANGLE_ELONG].to_numpy())
        out[ELONG_PLUNGE] = plunge_of_pitch(dip, out[ELONG_PITCH].to_numpy())
        out[APPARENT_DISPLACEMENT] = apparent_displacements(
            out[LIN_PITCH].to_numpy(),
            out[BEDDING_PITCH].to_numpy(),
            out[ELONG_PITCH].to_numpy(),
            out[TRUE_DISPLACEMENT].to_numpy(),
        )
        out[HEAVE] = out[APPARENT_DISPLACEMENT] * np.cos(np.radians(out[ELONG_PLUNGE]))
        return out


def select_faults(faults, numbers):
    """
    Keep the rows of a fault table whose identifier is in the analyst's list.

    Parameters
    ----------
    faults : pd.DataFrame
        Fault table with a ``number`` column.
    numbers : iterable of int
        Fault identifiers to keep. Every identifier must exist in the table.

    Returns
    -------
    pd.DataFrame
        The selected rows, in table order.
    """
    numbers = list(numbers)
    if not numbers:
        raise InputSchemaViolation("Fault selection is empty.")
    known = set(faults[NUMBER].astype(int))
    unknown = [n for n in numbers if int(n) not in known]
    if unknown:
        raise InputSchemaViolation(f"Fault numbers not in the table: {unknown}")
    return faults[faults[NUMBER].astype(int).isin([int(n) for n in numbers])]


def faults_near_azimuth(faults, azimuth, tolerance=None):
    """
    Mask the faults whose dip direction lies within a tolerance of an azimuth.

    Directions are compared axially, so a dip direction of 200 is 20 degrees from an azimuth of 0.
    This only proposes a selection; the analyst decides which rows are used.

    Parameters
    ----------
    faults : pd.DataFrame
        Fault table with a ``dipDirection`` column.
    azimuth : float
        Elongation azimuth in degrees.
    tolerance : float, optional
        Half width of the window in degrees. Default is the configured ``window_half_width``.

    Returns
    -------
    pd.Series
        Boolean mask aligned with the fault table.
    """
    azimuth = validate_azimuth(azimuth)
    if tolerance is None:
        tolerance = load_config()["window_half_width"]
    if not 0 <= tolerance <= 90:
        raise InputSchemaViolation(f"Azimuth tolerance must lie in [0, 90], got {tolerance}.")
    diff = axial_difference(faults[DIP_DIRECTION].to_numpy(dtype=float), azimuth)
    return pd.Series(diff <= tolerance, index=faults.index, name="nearAzimuth")
