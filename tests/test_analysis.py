import unittest

import numpy as np
import pandas as pd

import strainscan.model as ss
from strainscan.config import load_config

HEAVE_PER_OFFSET = 2.0 / np.sqrt(5.0) * 0.5

# Ten faults with offsets following an exact power law between two bounding faults
POWER_LAW_OFFSETS = [100.0 / n**2 for n in range(1, 11)]


def make_transect(bounding_offset):
    offsets = [bounding_offset] + POWER_LAW_OFFSETS + [bounding_offset]
    n = len(offsets)
    return pd.DataFrame(
        {
            "strike": [45.0] * n,
            "dip": [60.0] * n,
            "offset": offsets,
            "number": list(range(1, n + 1)),
            "dipDirection": [135.0] * n,
            "bedding": [0.0] * n,
            "beddingDip": [0.0] * n,
            "scanline": [90.0] * n,
            "linPitch": [90.0] * n,
        }
    )


PARAMS = ss.AnalysisParameters(
    azimuth=135.0,
    half_length=81.0,
    a_angles=(53.0, 101.0),
    b_angles=(23.0, 78.0),
    regression_window=(1, 10),
)


class TestElongationAnalysis(unittest.TestCase):

    def setUp(self):
        self.analysis = ss.ElongationAnalysis(make_transect(np.nan), make_transect(0.0), name="test")

    def test_direction(self):
        """Test the direction search on faults dipping toward 135."""
        direction = self.analysis.find_direction()
        self.assertEqual(direction.azimuth, 135.0)
        self.assertAlmostEqual(direction.ratio, 1.0)

    def test_candidate_faults_use_configured_window(self):
        """Test the proposed fault selection follows the configured window half width."""
        faults = make_transect(np.nan)
        faults["dipDirection"] = [135.0, 150.0, 165.0, 100.0] + [135.0] * 8
        self.assertEqual(ss.ElongationAnalysis(faults).candidate_faults(135.0), [1, 2] + list(range(5, 13)))
        config = dict(load_config(), window_half_width=40.0)
        self.assertEqual(ss.ElongationAnalysis(faults, config=config).candidate_faults(135.0), list(range(1, 13)))

    def test_full_run(self):
        """Test the baseline and revised elongation of a power law population."""
        result = self.analysis.run(PARAMS)
        length = ss.projected_length(81.0, 53.0, 101.0, 23.0, 78.0)
        added = sum(POWER_LAW_OFFSETS) * HEAVE_PER_OFFSET

        self.assertAlmostEqual(result.projected_length, length)
        self.assertAlmostEqual(result.added_length, added, places=9)
        self.assertEqual(result.n_excluded, 2)
        self.assertAlmostEqual(result.elongation, (length / (length - added) - 1) * 100, places=9)

        self.assertAlmostEqual(result.fit.slope, -0.5, places=9)
        # he = hn * 100 / 11 with hn the heave of the smallest fault
        he = HEAVE_PER_OFFSET * 100.0 / 11.0
        self.assertAlmostEqual(result.fit.extrapolated, he, places=6)
        expected_revised = (length / (length - added - he) - 1) * 100
        self.assertAlmostEqual(result.revised_elongation, expected_revised, places=6)
        self.assertGreater(result.revised_elongation, result.elongation)
        self.assertIsNone(result.revised_unavailable_reason)
        self.assertIn("Revised elongation er", result.report())

    def test_selected_faults(self):
        """Test the analyst's fault selection restricts the heave sum."""
        params = ss.AnalysisParameters(
            azimuth=135.0, half_length=81.0, a_angles=(53.0, 101.0), b_angles=(23.0, 78.0), fault_numbers=[2, 3]
        )
        result = self.analysis.run(params)
        self.assertAlmostEqual(result.added_length, (100.0 + 25.0) * HEAVE_PER_OFFSET, places=9)
        self.assertEqual(result.summary.n_faults, 2)
        self.assertIsNone(result.revised_elongation)
        self.assertEqual(result.revised_unavailable_reason, "no regression window given")

    def test_invalid_model_reports_baseline(self):
        """Test a refused regression keeps the baseline and flags the revised estimate unavailable."""
        config = dict(self.analysis.config, min_slope=0.6)
        analysis = ss.ElongationAnalysis(make_transect(np.nan), make_transect(0.0), config=config)
        result = analysis.run(PARAMS)
        self.assertTrue(np.isfinite(result.elongation))
        self.assertIsNone(result.fit)
        self.assertIsNone(result.revised_elongation)
        self.assertIn("flatter", result.revised_unavailable_reason)
        self.assertIn("unavailable", result.report())

    def test_without_bounded_table(self):
        """Test the small fault correction is skipped without the bounded fault table."""
        result = ss.ElongationAnalysis(make_transect(np.nan)).run(PARAMS)
        self.assertIsNone(result.revised_elongation)
        self.assertIn("bounding faults", result.revised_unavailable_reason)

    def test_repeatable(self):
        """Test two runs with identical inputs and parameters give identical outputs."""
        first = self.analysis.run(PARAMS)
        second = ss.ElongationAnalysis(make_transect(np.nan), make_transect(0.0)).run(PARAMS)
        self.assertEqual(first.elongation, second.elongation)
        self.assertEqual(first.revised_elongation, second.revised_elongation)
        self.assertEqual(first.fit.slope, second.fit.slope)
        self.assertEqual(first.direction, second.direction)
        pd.testing.assert_frame_equal(first.geometry, second.geometry, check_exact=True)

    def test_invalid_parameters(self):
        """Test schema violations in the inputs and parameters fail fast."""
        with self.assertRaises(ss.InputSchemaViolation):
            ss.ElongationAnalysis(make_transect(np.nan).drop(columns=["strike"]))
        with self.assertRaises(ss.InputSchemaViolation):
            ss.ElongationAnalysis(make_transect(np.nan), make_transect(np.nan))
        bad = ss.AnalysisParameters(azimuth=400.0, half_length=81.0, a_angles=(53.0, 101.0), b_angles=(23.0, 78.0))
        with self.assertRaises(ss.InputSchemaViolation):
            self.analysis.run(bad)

    def test_degenerate_baseline(self):
        """Test a baseline projection with no original length is raised to the caller."""
        params = ss.AnalysisParameters(azimuth=135.0, half_length=1.0, a_angles=(90.0, 90.0), b_angles=(0.0, 90.0))
        faults = make_transect(np.nan)
        faults["offset"] = [np.nan, 1.0 / HEAVE_PER_OFFSET] + [0.0] * 9 + [np.nan]
        with self.assertRaises(ss.DegenerateProjection):
            ss.ElongationAnalysis(faults).run(params)


if __name__ == "__main__":
    unittest.main()
