"""Exceptions raised by the elongation workflow."""


class StrainScanError(Exception):
    """Base class for all StrainScan errors."""

    pass


class DegenerateGeometry(StrainScanError, ArithmeticError):
    """Raised when a geometric identity has a zero denominator (parallel lines, tied pitches)."""

    pass


class InvalidExtrapolationModel(StrainScanError):
    """Raised when the frequency-size regression cannot support a small fault correction."""

    pass


class DegenerateProjection(StrainScanError, ArithmeticError):
    """Raised when the added length is indistinguishable from the projected transect length."""

    pass


class InputSchemaViolation(StrainScanError, ValueError):
    """Raised when an input table or analyst parameter fails validation."""

    pass
