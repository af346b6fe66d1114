""" Conversion between measured (apparent) and true fault displacement on the fault plane.

Three lines lie on the fault plane, each described by its signed pitch clockwise from strike:

- the slip lineation, pitch ``g``
- the trace of the displaced marker plane (bedding), pitch ``b``
- the observation line along which an offset is measured, pitch ``p``

The offset marker traces are parallel lines on the fault plane a perpendicular distance
``S |sin(g - b)|`` apart, where ``S`` is the true displacement. Any line crossing them measures
``Sm = S |sin(g - b)| / |sin(p - b)|``. Which sine terms apply depends on the sign and magnitude
relationship of the three pitches, so the relationship is first classified into one of nine
`SlipCase` members and each case dispatches to its own pair of sine terms.
"""

import logging
from enum import Enum

import numpy as np

from strainscan.model.errors import DegenerateGeometry

log = logging.getLogger("StrainScan")


class SlipCase(Enum):
    """
    Sign and magnitude relationship between the slip (g), marker (b) and observation (p) pitches.

    Magnitudes are written G, B and P. A zero pitch counts as positive.
    """

    # g and b share a sign, |b| > |g|
    MARKER_STEEP_OBS_OUTER = "same sign, B > G, p with b, P > B"
    MARKER_STEEP_OBS_INNER = "same sign, B > G, p with b, B > P"
    MARKER_STEEP_OBS_OPPOSED = "same sign, B > G, p against b"
    # g and b share a sign, |g| > |b|
    SLIP_STEEP_OBS_OUTER = "same sign, G > B, p with b, P > B"
    SLIP_STEEP_OBS_INNER = "same sign, G > B, p with b, B > P"
    SLIP_STEEP_OBS_OPPOSED = "same sign, G > B, p against b"
    # g and b have opposite signs
    OPPOSED_OBS_WITH_SLIP = "opposite signs, p with g"
    OPPOSED_OBS_OUTER = "opposite signs, p with b, P > B"
    OPPOSED_OBS_INNER = "opposite signs, p with b, B > P"


# Angle (degrees) of each sine term as a function of the magnitudes (G, B, P).
_TERMS = {
    "P-B": lambda G, B, P: P - B,
    "B-P": lambda G, B, P: B - P,
    "P+B": lambda G, B, P: P + B,
    "B-G": lambda G, B, P: B - G,
    "G-B": lambda G, B, P: G - B,
    "G+B": lambda G, B, P: G + B,
}

# (observation term, slip term) for every case. True displacement is
# Sm * sin(observation term) / sin(slip term); the apparent displacement inverts the ratio.
SLIP_CASE_TERMS = {
    SlipCase.MARKER_STEEP_OBS_OUTER: ("P-B", "B-G"),
    SlipCase.MARKER_STEEP_OBS_INNER: ("B-P", "B-G"),
    SlipCase.MARKER_STEEP_OBS_OPPOSED: ("P+B", "B-G"),
    SlipCase.SLIP_STEEP_OBS_OUTER: ("P-B", "G-B"),
    SlipCase.SLIP_STEEP_OBS_INNER: ("B-P", "G-B"),
    SlipCase.SLIP_STEEP_OBS_OPPOSED: ("P+B", "G-B"),
    SlipCase.OPPOSED_OBS_WITH_SLIP: ("P+B", "G+B"),
    SlipCase.OPPOSED_OBS_OUTER: ("P-B", "G+B"),
    SlipCase.OPPOSED_OBS_INNER: ("B-P", "G+B"),
}


def _positive(angle):
    return angle >= 0


def classify_slip_case(g, b, p):
    """
    Classify the pitch relationship on a fault plane into a `SlipCase`.

    Parameters
    ----------
    g : float
        Pitch of the slip lineation in degrees.
    b : float
        Pitch of the marker trace in degrees.
    p : float
        Pitch of the observation line in degrees.

    Returns
    -------
    SlipCase
        The case selecting the sine terms of the displacement ratio.

    Raises
    ------
    DegenerateGeometry
        If any pitch is undefined, the slip is parallel to the marker trace (g == b) or the
        observation line is parallel to the marker trace (p == b).
    """
    if np.isnan(g) or np.isnan(b) or np.isnan(p):
        raise DegenerateGeometry(f"Undefined pitch in (g={g}, b={b}, p={p}).")
    if g == b:
        raise DegenerateGeometry(f"Slip pitch {g} is parallel to the marker trace.")
    if p == b:
        raise DegenerateGeometry(f"Observation pitch {p} is parallel to the marker trace.")

    G, B, P = abs(g), abs(b), abs(p)

    if _positive(g) == _positive(b):
        p_with_b = _positive(p) == _positive(b)
        if B > G:
            if not p_with_b:
                return SlipCase.MARKER_STEEP_OBS_OPPOSED
            return SlipCase.MARKER_STEEP_OBS_OUTER if P > B else SlipCase.MARKER_STEEP_OBS_INNER
        if not p_with_b:
            return SlipCase.SLIP_STEEP_OBS_OPPOSED
        return SlipCase.SLIP_STEEP_OBS_OUTER if P > B else SlipCase.SLIP_STEEP_OBS_INNER

    if _positive(p) == _positive(g):
        return SlipCase.OPPOSED_OBS_WITH_SLIP
    return SlipCase.OPPOSED_OBS_OUTER if P > B else SlipCase.OPPOSED_OBS_INNER


def slip_case_sines(case, g, b, p):
    """Return the (observation, slip) sine terms of the displacement ratio for a classified case."""
    G, B, P = abs(g), abs(b), abs(p)
    observation_term, slip_term = SLIP_CASE_TERMS[case]
    observation = np.sin(np.radians(_TERMS[observation_term](G, B, P)))
    slip = np.sin(np.radians(_TERMS[slip_term](G, B, P)))
    return observation, slip


def true_displacement(g, b, p, measured):
    """
    Convert an offset measured along the observation line into the true displacement.

    Parameters
    ----------
    g, b, p : float
        Pitches of the slip lineation, marker trace and observation line in degrees.
    measured : float
        Offset measured along the observation line. Its sign (fault sense) is kept.

    Returns
    -------
    float
        True displacement along the slip lineation, NaN for degenerate geometry.
    """
    try:
        case = classify_slip_case(g, b, p)
    except DegenerateGeometry as e:
        log.debug(f"True displacement undefined: {e}")
        return np.nan

    observation, slip = slip_case_sines(case, g, b, p)
    if observation == 0 or slip == 0:
        log.debug(f"True displacement undefined: zero sine term in case {case.name}.")
        return np.nan
    return float(measured * observation / slip)


def apparent_displacement(g, b, p, true):
    """
    Project a true displacement onto an observation line, the inverse of `true_displacement`.

    Returns
    -------
    float
        Apparent displacement along the line of pitch ``p``, NaN for degenerate geometry.
    """
    try:
        case = classify_slip_case(g, b, p)
    except DegenerateGeometry as e:
        log.debug(f"Apparent displacement undefined: {e}")
        return np.nan

    observation, slip = slip_case_sines(case, g, b, p)
    if observation == 0 or slip == 0:
        log.debug(f"Apparent displacement undefined: zero sine term in case {case.name}.")
        return np.nan
    return float(true * slip / observation)


def true_displacements(g, b, p, measured):
    """Element-wise `true_displacement` over equally shaped arrays."""
    g, b, p, measured = np.broadcast_arrays(*(np.asarray(x, dtype=float) for x in (g, b, p, measured)))
    out = [true_displacement(*values) for values in zip(g.ravel(), b.ravel(), p.ravel(), measured.ravel())]
    return np.array(out, dtype=float).reshape(g.shape)


def apparent_displacements(g, b, p, true):
    """Element-wise `apparent_displacement` over equally shaped arrays."""
    g, b, p, true = np.broadcast_arrays(*(np.asarray(x, dtype=float) for x in (g, b, p, true)))
    out = [apparent_displacement(*values) for values in zip(g.ravel(), b.ravel(), p.ravel(), true.ravel())]
    return np.array(out, dtype=float).reshape(g.shape)
