""" Fault table schema, validation and the value objects passed between analysis stages."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from strainscan.model.errors import InputSchemaViolation

# Input columns
STRIKE = "strike"
DIP = "dip"
OFFSET = "offset"
NUMBER = "number"
DIP_DIRECTION = "dipDirection"
BEDDING = "bedding"
BEDDING_DIP = "beddingDip"
SCANLINE = "scanline"
LIN_PITCH = "linPitch"

FAULT_COLUMNS = [STRIKE, DIP, OFFSET, NUMBER, DIP_DIRECTION, BEDDING, BEDDING_DIP, SCANLINE, LIN_PITCH]

# Columns holding azimuths in [0, 360) and dips in [0, 90]
AZIMUTH_COLUMNS = [STRIKE, DIP_DIRECTION, BEDDING, SCANLINE]
DIP_COLUMNS = [DIP, BEDDING_DIP]

# Derived geometry columns, in the order they are computed
ACUTE_ANGLE_BED = "acuteAngleBed"
ACUTE_ANGLE_SCAN = "acuteAngleScan"
ACUTE_ANGLE_ELONG = "acuteAngleElong"
ADJUSTED_BEDDING_DIP = "adjustedBeddingDip"
BEDDING_PITCH = "beddingPitch"
SCANLINE_PITCH = "scanlinePitch"
TRUE_DISPLACEMENT = "trueDisplacement"
ELONG_PITCH = "elongPitch"
ELONG_PLUNGE = "elongPlunge"
APPARENT_DISPLACEMENT = "apparentDisplacement"
HEAVE = "heave"

DERIVED_COLUMNS = [
    ACUTE_ANGLE_BED,
    ACUTE_ANGLE_SCAN,
    ACUTE_ANGLE_ELONG,
    ADJUSTED_BEDDING_DIP,
    BEDDING_PITCH,
    SCANLINE_PITCH,
    TRUE_DISPLACEMENT,
    ELONG_PITCH,
    ELONG_PLUNGE,
    APPARENT_DISPLACEMENT,
    HEAVE,
]


def validate_fault_table(faults, require_offset=True):
    """
    Check a fault table against the input schema and return a numeric copy.

    Parameters
    ----------
    faults : pd.DataFrame
        One row per fault with the columns listed in `FAULT_COLUMNS`.
    require_offset : bool, optional
        If False, missing offsets (bounding faults in a table without their offsets) are accepted
        as NaN. Default is True.

    Returns
    -------
    pd.DataFrame
        A copy with numeric columns coerced to float and `number` to integer.

    Raises
    ------
    InputSchemaViolation
        If a column is missing, a value is not numeric, or an azimuth or dip is out of range.
    """
    if not isinstance(faults, pd.DataFrame):
        raise InputSchemaViolation(f"Fault table must be a pandas DataFrame, got {type(faults)}.")

    missing = [col for col in FAULT_COLUMNS if col not in faults.columns]
    if missing:
        raise InputSchemaViolation(f"Fault table is missing required columns: {missing}")
    if faults.empty:
        raise InputSchemaViolation("Fault table has no rows.")

    out = faults.copy()
    for col in FAULT_COLUMNS:
        coerced = pd.to_numeric(out[col], errors="coerce")
        bad = coerced.isna() & out[col].notna()
        if bad.any():
            raise InputSchemaViolation(f"Column '{col}' has non-numeric values at rows {list(out.index[bad])}.")
        out[col] = coerced.astype(float)

    nullable = [] if require_offset else [OFFSET]
    for col in FAULT_COLUMNS:
        if col in nullable:
            continue
        if out[col].isna().any():
            raise InputSchemaViolation(f"Column '{col}' has missing values at rows {list(out.index[out[col].isna()])}.")

    for col in AZIMUTH_COLUMNS:
        outside = (out[col] < 0) | (out[col] >= 360)
        if outside.any():
            raise InputSchemaViolation(f"Column '{col}' must lie in [0, 360), found {list(out.loc[outside, col])}.")
    for col in DIP_COLUMNS:
        outside = (out[col] < 0) | (out[col] > 90)
        if outside.any():
            raise InputSchemaViolation(f"Column '{col}' must lie in [0, 90], found {list(out.loc[outside, col])}.")

    if (out[NUMBER] != np.round(out[NUMBER])).any():
        raise InputSchemaViolation(f"Column '{NUMBER}' must hold integer identifiers.")
    out[NUMBER] = out[NUMBER].astype(int)
    if out[NUMBER].duplicated().any():
        raise InputSchemaViolation(f"Column '{NUMBER}' has duplicated identifiers.")

    return out


def validate_azimuth(azimuth, name="azimuth"):
    """Check a single azimuth lies in [0, 360) and return it as a float."""
    try:
        azimuth = float(azimuth)
    except (TypeError, ValueError):
        raise InputSchemaViolation(f"{name} must be numeric, got {azimuth!r}.")
    if not 0 <= azimuth < 360:
        raise InputSchemaViolation(f"{name} must lie in [0, 360), got {azimuth}.")
    return azimuth


@dataclass(frozen=True)
class ElongationDirection:
    """
    The azimuth of maximum elongation found by the direction sweep.

    Attributes
    ----------
    azimuth : float
        Azimuth in [0, 180) with the largest average apparent offset ratio.
    ratio : float
        The average ratio at that azimuth.
    curve : pd.DataFrame
        The full sweep, columns ``azimuth`` and ``ratio``.
    """

    azimuth: float
    ratio: float
    curve: pd.DataFrame = field(repr=False, compare=False)


@dataclass(frozen=True)
class HeaveSummary:
    """Per fault derived geometry along an azimuth and the summed heave dF."""

    azimuth: float
    geometry: pd.DataFrame = field(repr=False, compare=False)
    total: float
    n_faults: int
    n_excluded: int

    @property
    def heaves(self):
        return self.geometry[HEAVE]


@dataclass(frozen=True)
class FractalFit:
    """Frequency-size regression over a rank window and the extrapolated small fault heave."""

    slope: float
    intercept: float
    rvalue: float
    window: Tuple[int, int]
    n_window: int
    smallest_heave: float
    extrapolated: float
    ranked: pd.DataFrame = field(repr=False, compare=False)


@dataclass(frozen=True)
class ElongationResult:
    """Everything reported by one analysis run."""

    direction: Optional[ElongationDirection]
    azimuth: float
    projected_length: float
    summary: HeaveSummary = field(repr=False)
    elongation: float
    fit: Optional[FractalFit] = None
    revised_elongation: Optional[float] = None
    revised_unavailable_reason: Optional[str] = None

    @property
    def added_length(self):
        return self.summary.total

    @property
    def n_excluded(self):
        return self.summary.n_excluded

    @property
    def geometry(self):
        return self.summary.geometry

    def report(self):
        """Return a printable report of the run."""
        lines = []
        if self.direction is not None:
            lines.append(f"Maximum elongation azimuth: {self.direction.azimuth:.0f} (ratio {self.direction.ratio:.3f})")
        lines.append(f"Azimuth used: {self.azimuth:.1f}")
        lines.append(f"Projected transect length Lf: {self.projected_length:.3f}")
        lines.append(f"Added length dF: {self.added_length:.3f}")
        lines.append(f"Faults excluded: {self.n_excluded} of {self.summary.n_faults}")
        lines.append(f"Elongation e: {self.elongation:.3f} %")
        if self.fit is not None:
            lines.append(f"Fractal slope C: {self.fit.slope:.4f} (r = {self.fit.rvalue:.3f})")
            lines.append(f"Extrapolated small fault heave he: {self.fit.extrapolated:.3f}")
        if self.revised_elongation is not None:
            lines.append(f"Revised elongation er: {self.revised_elongation:.3f} %")
        else:
            lines.append(f"Revised elongation unavailable: {self.revised_unavailable_reason}")
        return "\n".join(lines)
