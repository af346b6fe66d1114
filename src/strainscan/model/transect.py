""" Projection of the measured transect onto the elongation direction and percent elongation."""

import numpy as np

from strainscan.model.errors import DegenerateProjection, InputSchemaViolation


def projected_length(half_length, a_opposite, a_adjacent, b_opposite, b_adjacent):
    """
    Length of a straight transect measured along the elongation direction.

    Each half of the transect closes a triangle with the elongation direction; the law of sines
    converts the half length with the two measured angles of each triangle:

        Lf = half * sin(Aa) / sin(Ab) + half * sin(Ba) / sin(Bb)

    Parameters
    ----------
    half_length : float
        Half of the measured transect length.
    a_opposite, a_adjacent : float
        Closure angles (degrees) of the first triangle.
    b_opposite, b_adjacent : float
        Closure angles (degrees) of the second triangle.

    Returns
    -------
    float
        The projected transect length Lf.
    """
    if not half_length > 0:
        raise InputSchemaViolation(f"Half transect length must be positive, got {half_length}.")
    sines = np.sin(np.radians([a_opposite, a_adjacent, b_opposite, b_adjacent]))
    if np.isclose(sines[1], 0.0) or np.isclose(sines[3], 0.0):
        raise DegenerateProjection("A closure triangle has a zero sine denominator angle.")
    return float(half_length * sines[0] / sines[1] + half_length * sines[2] / sines[3])


def percent_elongation(length, added, tolerance=1e-9):
    """
    Percent elongation of a line of final length ``length`` that gained ``added`` by faulting.

    e = (Lf / (Lf - dF) - 1) * 100

    Raises
    ------
    DegenerateProjection
        If the original length Lf - dF is zero within ``tolerance`` relative to Lf.
    """
    original = length - added
    if abs(original) <= tolerance * max(1.0, abs(length)):
        raise DegenerateProjection(
            f"Added length {added:.6g} equals the projected length {length:.6g}; elongation is undefined."
        )
    return float((length / original - 1) * 100)


class TransectProjector:
    """
    A measured transect projected onto the elongation direction.

    Parameters
    ----------
    half_length : float
        Half of the measured transect length.
    a_angles : tuple of float
        (Aa, Ab) closure angles of the first triangle, degrees.
    b_angles : tuple of float
        (Ba, Bb) closure angles of the second triangle, degrees.
    tolerance : float, optional
        Relative tolerance for a degenerate projection. Default is 1e-9.
    """

    def __init__(self, half_length, a_angles, b_angles, tolerance=1e-9):
        self.half_length = half_length
        self.a_angles = tuple(a_angles)
        self.b_angles = tuple(b_angles)
        self.tolerance = tolerance
        if len(self.a_angles) != 2 or len(self.b_angles) != 2:
            raise InputSchemaViolation("Closure angles must be given as two pairs of angles.")
        self.length = projected_length(half_length, *self.a_angles, *self.b_angles)

    def __str__(self):
        return f"TransectProjector: half length {self.half_length:.1f}, Lf {self.length:.3f}"

    def elongation(self, added):
        """Percent elongation for the added length ``added``."""
        return percent_elongation(self.length, added, self.tolerance)
