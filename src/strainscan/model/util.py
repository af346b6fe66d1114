import numpy as np

# Eight 90 degree bands covering the strike difference range [-360, 360]. Each band is closed on
# its upper edge except the first, which also includes -360. The second column is the fold applied
# to bring the difference into (-90, 90].
STRIKE_BANDS = np.array(
    [
        [-360.0, -270.0, 360.0],
        [-270.0, -180.0, 180.0],
        [-180.0, -90.0, 180.0],
        [-90.0, 0.0, 0.0],
        [0.0, 90.0, 0.0],
        [90.0, 180.0, -180.0],
        [180.0, 270.0, -180.0],
        [270.0, 360.0, -360.0],
    ]
)


def _strike_band(fault_strike, other_strike):
    """Return the strike difference and the index of the band it falls in (-1 when out of range)."""
    d = np.asarray(np.asarray(other_strike, dtype=float) - np.asarray(fault_strike, dtype=float))
    lower, upper = STRIKE_BANDS[:, 0], STRIKE_BANDS[:, 1]
    # (lower, upper] for every band, with -360 itself belonging to the first
    in_band = (d[..., np.newaxis] > lower) & (d[..., np.newaxis] <= upper)
    in_band[..., 0] |= d == -360.0
    band = np.where(in_band.any(axis=-1), np.argmax(in_band, axis=-1), -1)
    return d, band


def acute_angle(fault_strike, other_strike):
    """
    Calculate the acute angle from a fault strike to the strike of another plane or line.

    The strike difference ``other - fault`` is folded by 180 degrees in the bands where the other
    strike points into the opposite hemisphere, and by 360 degrees in the outermost bands, so the
    result always lies in (-90, 90]. Strikes must be reduced modulo 360 beforehand; differences
    outside [-360, 360] return NaN.

    Parameters
    ----------
    fault_strike : float or array-like
        Strike of the fault plane in degrees.
    other_strike : float or array-like
        Strike of the marker plane, scanline or direction in degrees.

    Returns
    -------
    float or np.ndarray
        Signed acute angle in degrees, positive clockwise from the fault strike.
    """
    d, band = _strike_band(fault_strike, other_strike)
    fold = np.where(band >= 0, STRIKE_BANDS[band, 2], np.nan)
    angle = d + fold
    return angle if angle.ndim else float(angle)


def adjusted_dip(fault_strike, other_strike, other_dip):
    """
    Sign the dip of another plane by the side of the fault plane its dip vector falls on.

    Planes striking 90 to 270 degrees away from the fault strike (the bands folded by 180 in
    `acute_angle`) get a negated dip, all other planes keep their dip.

    Returns
    -------
    float or np.ndarray
        ``+other_dip`` or ``-other_dip``, NaN when the strike difference is out of range.
    """
    _, band = _strike_band(fault_strike, other_strike)
    other_dip = np.asarray(other_dip, dtype=float)
    folds = STRIKE_BANDS[band, 2]
    sign = np.where(band < 0, np.nan, np.where(np.abs(folds) == 180.0, -1.0, 1.0))
    signed = sign * other_dip
    return signed if signed.ndim else float(signed)


def pitch_on_plane(fault_dip, plane_dip, acute, tolerance=1e-12):
    """
    Calculate the pitch of the intersection of a plane with the fault plane.

    pitch = atan( sin(u) tan(a) tan(t) / ( sin(a) (tan(t) cos(u) - tan(a)) ) )

    where a is the fault dip, t the (sign adjusted) dip of the other plane and u the acute angle
    between their strikes. Vertical planes (t = 90) should use `vertical_section_pitch`, since
    tan(t) overflows there.

    Parameters
    ----------
    fault_dip : float or array-like
        Dip of the fault plane in degrees.
    plane_dip : float or array-like
        Signed dip of the intersecting plane in degrees.
    acute : float or array-like
        Acute angle between the strikes in degrees, from `acute_angle`.
    tolerance : float
        Denominators with a magnitude at or below this value are treated as zero.

    Returns
    -------
    float or np.ndarray
        Pitch in degrees clockwise from the fault strike, in (-90, 90). NaN when the intersection
        is parallel to the fault dip line and the pitch is undefined.
    """
    a = np.radians(np.asarray(fault_dip, dtype=float))
    t = np.radians(np.asarray(plane_dip, dtype=float))
    u = np.radians(np.asarray(acute, dtype=float))

    numerator = np.sin(u) * np.tan(a) * np.tan(t)
    denominator = np.sin(a) * (np.tan(t) * np.cos(u) - np.tan(a))

    degenerate = ~(np.abs(denominator) > tolerance)
    safe = np.where(degenerate, 1.0, denominator)
    pitch = np.where(degenerate, np.nan, np.degrees(np.arctan(numerator / safe)))
    return pitch if pitch.ndim else float(pitch)


def vertical_section_pitch(fault_dip, acute):
    """
    Calculate the pitch of the trace of a vertical section on the fault plane.

    tan(pitch) = sin(u) / (cos(u) cos(a))

    This is `pitch_on_plane` for a vertical plane (t = 90) in closed form. The section strikes at
    the acute angle u from the fault strike. Its trace is the line on the fault below a scanline or
    below the elongation direction. It is not horizontal unless u = 0.

    Parameters
    ----------
    fault_dip : float or array-like
        Dip of the fault plane in degrees.
    acute : float or array-like
        Acute angle from the fault strike to the section strike in degrees, from `acute_angle`.

    Returns
    -------
    float or np.ndarray
        Pitch in degrees clockwise from the fault strike, in (-90, 90]. A section perpendicular to
        the strike gives the dip line, 90.
    """
    a = np.radians(np.asarray(fault_dip, dtype=float))
    u = np.radians(np.asarray(acute, dtype=float))
    pitch = np.degrees(np.arctan2(np.sin(u), np.cos(u) * np.cos(a)))
    # arctan2 covers (-180, 180]; a line and its reverse share a pitch
    pitch = np.where(pitch > 90.0, pitch - 180.0, pitch)
    pitch = np.where(pitch <= -90.0, pitch + 180.0, pitch)
    return pitch if pitch.ndim else float(pitch)


def plunge_of_pitch(fault_dip, pitch):
    """Plunge in degrees of a line with the given pitch on a plane of the given dip."""
    a = np.radians(np.asarray(fault_dip, dtype=float))
    r = np.radians(np.asarray(pitch, dtype=float))
    plunge = np.degrees(np.arcsin(np.sin(r) * np.sin(a)))
    return plunge if plunge.ndim else float(plunge)


def axial_difference(azimuth_a, azimuth_b):
    """Smallest angle in [0, 90] between two axial (modulo 180) directions."""
    d = np.mod(np.asarray(azimuth_a, dtype=float) - np.asarray(azimuth_b, dtype=float), 180.0)
    diff = np.minimum(d, 180.0 - d)
    return diff if diff.ndim else float(diff)
