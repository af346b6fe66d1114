import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from strainscan.config import load_config
from strainscan.model.direction import find_elongation_direction
from strainscan.model.errors import DegenerateProjection, InvalidExtrapolationModel
from strainscan.model.extrapolation import SmallFaultExtrapolator
from strainscan.model.faults import NUMBER, ElongationResult, validate_azimuth, validate_fault_table
from strainscan.model.heave import FaultSetProcessor, faults_near_azimuth, select_faults
from strainscan.model.transect import TransectProjector

# Set up a simple logger
logging.basicConfig(level=logging.INFO)
log = logging.getLogger("StrainScan")


@dataclass(frozen=True)
class AnalysisParameters:
    """
    The analyst's decisions for one run.

    Attributes
    ----------
    azimuth : float
        Elongation azimuth read off the direction curve, degrees.
    half_length : float
        Half of the measured transect length.
    a_angles : tuple of float
        (Aa, Ab) closure angles of the first triangle, degrees.
    b_angles : tuple of float
        (Ba, Bb) closure angles of the second triangle, degrees.
    fault_numbers : sequence of int, optional
        Faults kept for the heave sum, typically those within 25 degrees of the azimuth. None keeps
        every fault.
    regression_window : tuple of int, optional
        Inclusive rank window on the linear part of the frequency-size plot. None skips the small
        fault correction.
    """

    azimuth: float
    half_length: float
    a_angles: Tuple[float, float]
    b_angles: Tuple[float, float]
    fault_numbers: Optional[Sequence[int]] = None
    regression_window: Optional[Tuple[int, int]] = None


class ElongationAnalysis:
    """
    Elongation of one transect from its fault catalog.

    The analysis holds the two input tables and runs the full workflow for a set of analyst
    parameters. Inputs are validated on construction and never modified, so repeated runs with the
    same parameters give identical results.

    Parameters
    ----------
    faults : pd.DataFrame
        Fault table without the bounding fault offsets. Used for the direction search and dF.
    bounded_faults : pd.DataFrame, optional
        Fault table including the bounding faults with their offsets. Used for the frequency-size
        regression. Default is None, which disables the small fault correction.
    config : dict, optional
        Configuration as returned by `load_config`. Default is the shipped configuration.
    name : str, optional
        Name of the transect. Default is "transect".
    """

    def __init__(self, faults, bounded_faults=None, config=None, name="transect"):
        self.name = name
        self.config = config if config is not None else load_config()
        log.setLevel(self.config.get("log_level", "INFO"))

        self.faults = validate_fault_table(faults, require_offset=False)
        self.bounded_faults = None
        if bounded_faults is not None:
            self.bounded_faults = validate_fault_table(bounded_faults)

    def __repr__(self):
        n_bounded = 0 if self.bounded_faults is None else len(self.bounded_faults)
        return f"ElongationAnalysis(name={self.name}, faults={len(self.faults)}, bounded_faults={n_bounded})"

    def find_direction(self):
        """Sweep the candidate azimuths and return the `ElongationDirection`."""
        return find_elongation_direction(self.faults, step=int(self.config["azimuth_step"]))

    def candidate_faults(self, azimuth):
        """
        Propose the fault numbers whose dip direction lies within the configured
        ``window_half_width`` of an azimuth, for use as `AnalysisParameters.fault_numbers`.
        """
        mask = faults_near_azimuth(self.faults, azimuth, tolerance=self.config["window_half_width"])
        numbers = [int(n) for n in self.faults.loc[mask, NUMBER]]
        log.info(f"{self.name}: {len(numbers)} of {len(self.faults)} faults near azimuth {azimuth}")
        return numbers

    def run(self, parameters, direction=None):
        """
        Run the workflow for one set of analyst parameters.

        Parameters
        ----------
        parameters : AnalysisParameters
            The analyst's choices of azimuth, faults, window and closure angles.
        direction : ElongationDirection, optional
            A direction already found for this transect, reported alongside the results. Default is
            None, in which case the sweep is run again.

        Returns
        -------
        ElongationResult
            Baseline and, when available, revised elongation with the supporting diagnostics.

        Raises
        ------
        InputSchemaViolation
            If a parameter fails validation.
        DegenerateProjection
            If the baseline elongation is undefined.
        """
        azimuth = validate_azimuth(parameters.azimuth, name="Elongation azimuth")
        if direction is None:
            direction = self.find_direction()

        projector = TransectProjector(
            parameters.half_length,
            parameters.a_angles,
            parameters.b_angles,
            tolerance=self.config["projection_tolerance"],
        )
        processor = FaultSetProcessor(azimuth, pitch_tolerance=self.config["pitch_tolerance"])

        faults = self.faults
        if parameters.fault_numbers is not None:
            faults = select_faults(faults, parameters.fault_numbers)
        summary = processor.run(faults)

        elongation = projector.elongation(summary.total)
        log.info(f"{self.name}: Lf = {projector.length:.3f}, dF = {summary.total:.3f}, e = {elongation:.3f} %")

        fit, revised, reason = None, None, None
        if parameters.regression_window is None:
            reason = "no regression window given"
        elif self.bounded_faults is None:
            reason = "no fault table with bounding faults given"
        else:
            bounded = processor.run(self.bounded_faults)
            extrapolator = SmallFaultExtrapolator(parameters.regression_window, min_slope=self.config["min_slope"])
            try:
                fit = extrapolator.run(bounded.heaves)
                revised = projector.elongation(summary.total + fit.extrapolated)
                log.info(f"{self.name}: he = {fit.extrapolated:.3f}, er = {revised:.3f} %")
            except (InvalidExtrapolationModel, DegenerateProjection) as e:
                reason = str(e)

        if reason is not None:
            log.warning(f"{self.name}: revised elongation unavailable, {reason}")

        return ElongationResult(
            direction=direction,
            azimuth=azimuth,
            projected_length=projector.length,
            summary=summary,
            elongation=elongation,
            fit=fit,
            revised_elongation=revised,
            revised_unavailable_reason=reason,
        )
