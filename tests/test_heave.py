import unittest

import numpy as np
import pandas as pd

import strainscan.model as ss
from strainscan.config import load_config
from strainscan.model.faults import DERIVED_COLUMNS

# Horizontal component of a dip slip displacement on a 60 degree fault, measured in the vertical
# section of an east trending scanline crossing a fault striking 045:
#   scanline pitch = atan(tan(45) / cos(60)) -> sin(pitch) = 2 / sqrt(5)
#   heave along the dip direction = offset * sin(pitch) * cos(60)
HEAVE_PER_OFFSET = 2.0 / np.sqrt(5.0) * 0.5


def make_faults(offsets, bedding_dip=0.0, lin_pitch=90.0):
    n = len(offsets)
    return pd.DataFrame(
        {
            "strike": [45.0] * n,
            "dip": [60.0] * n,
            "offset": offsets,
            "number": list(range(1, n + 1)),
            "dipDirection": [135.0] * n,
            "bedding": [0.0] * n,
            "beddingDip": [bedding_dip] * n,
            "scanline": [90.0] * n,
            "linPitch": [lin_pitch] * n,
        }
    )


class TestFaultSetProcessor(unittest.TestCase):

    def test_dip_slip_heave(self):
        """Test the heave of a dip slip fault along its dip direction is its horizontal component."""
        summary = ss.FaultSetProcessor(135.0).run(make_faults([0.0, 10.0, 0.0]))
        heaves = summary.heaves.to_numpy()
        self.assertAlmostEqual(heaves[1], 10.0 * HEAVE_PER_OFFSET, places=9)
        self.assertAlmostEqual(summary.total, 10.0 * HEAVE_PER_OFFSET, places=9)
        self.assertEqual(summary.n_faults, 3)
        self.assertEqual(summary.n_excluded, 0)

    def test_derived_columns(self):
        """Test every derived column is appended and consistent with its neighbours."""
        geometry = ss.FaultSetProcessor(135.0).run(make_faults([0.0, 10.0, 0.0], bedding_dip=10.0)).geometry
        for col in DERIVED_COLUMNS:
            self.assertIn(col, geometry.columns)
        row = geometry.iloc[1]
        self.assertAlmostEqual(row["acuteAngleBed"], -45.0)
        self.assertAlmostEqual(row["acuteAngleScan"], 45.0)
        self.assertAlmostEqual(row["acuteAngleElong"], 90.0)
        self.assertAlmostEqual(row["adjustedBeddingDip"], 10.0)
        self.assertAlmostEqual(
            row["heave"], row["apparentDisplacement"] * np.cos(np.radians(row["elongPlunge"])), places=12
        )
        self.assertTrue(np.isfinite(row["heave"]))
        self.assertGreater(row["heave"], 0)

    def test_excluded_faults_not_summed(self):
        """Test undefined heaves are counted and left out of dF rather than summed as zero."""
        faults = make_faults([0.0, 10.0, 4.0, 0.0])
        # Slip parallel to the horizontal bedding trace
        faults.loc[2, "linPitch"] = 0.0
        summary = ss.FaultSetProcessor(135.0).run(faults)
        self.assertEqual(summary.n_excluded, 1)
        self.assertTrue(np.isnan(summary.heaves.iloc[2]))
        self.assertAlmostEqual(summary.total, 10.0 * HEAVE_PER_OFFSET, places=9)

    def test_missing_offsets_excluded(self):
        """Test bounding faults without an offset are carried as undefined heaves."""
        summary = ss.FaultSetProcessor(135.0).run(make_faults([np.nan, 10.0, np.nan]))
        self.assertEqual(summary.n_excluded, 2)
        self.assertAlmostEqual(summary.total, 10.0 * HEAVE_PER_OFFSET, places=9)

    def test_input_not_modified(self):
        """Test the caller's table is left untouched."""
        faults = make_faults([0.0, 10.0, 0.0])
        original = faults.copy()
        ss.FaultSetProcessor(135.0).run(faults)
        pd.testing.assert_frame_equal(faults, original)

    def test_sum_order_independent(self):
        """Test reordering the faults does not change dF."""
        faults = make_faults([0.0, 10.0, 3.0, 7.5, 0.0], bedding_dip=10.0)
        forward = ss.FaultSetProcessor(120.0).run(faults).total
        backward = ss.FaultSetProcessor(120.0).run(faults.iloc[::-1]).total
        self.assertAlmostEqual(forward, backward, places=12)

    def test_repeatable(self):
        """Test repeated runs are bit identical."""
        faults = make_faults([0.0, 10.0, 3.0, 0.0], bedding_dip=10.0)
        first = ss.FaultSetProcessor(130.0).run(faults)
        second = ss.FaultSetProcessor(130.0).run(faults)
        pd.testing.assert_frame_equal(first.geometry, second.geometry, check_exact=True)
        self.assertEqual(first.total, second.total)

    def test_invalid_input(self):
        """Test schema violations fail before any geometry is computed."""
        with self.assertRaises(ss.InputSchemaViolation):
            ss.FaultSetProcessor(360.0)
        bad = make_faults([0.0, 10.0])
        bad.loc[0, "dip"] = 95.0
        with self.assertRaises(ss.InputSchemaViolation):
            ss.FaultSetProcessor(135.0).run(bad)
        with self.assertRaises(ss.InputSchemaViolation):
            ss.FaultSetProcessor(135.0).run(make_faults([1.0]).drop(columns=["linPitch"]))


class TestPerpendicularSections(unittest.TestCase):

    def single_fault(self, dip, scanline=90.0):
        faults = make_faults([10.0])
        faults["dip"] = dip
        faults["scanline"] = scanline
        return faults

    def test_dip_line_azimuth_keeps_every_dip(self):
        """Test an azimuth perpendicular to strike gives a defined heave for dips around 45."""
        for dip in [44.0, 45.0, 46.0]:
            summary = ss.FaultSetProcessor(135.0).run(self.single_fault(dip))
            self.assertEqual(summary.n_excluded, 0)
            self.assertTrue(np.isfinite(summary.total))
            self.assertGreater(summary.total, 0)

    def test_elongation_plunge_sign(self):
        """Test the elongation line is the dip line, plunging at the fault dip, whatever the dip."""
        for dip in [30.0, 44.0, 45.0, 46.0, 70.0]:
            row = ss.FaultSetProcessor(135.0).run(self.single_fault(dip)).geometry.iloc[0]
            self.assertAlmostEqual(row["elongPitch"], 90.0, places=9)
            self.assertAlmostEqual(row["elongPlunge"], dip, places=9)

    def test_scanline_along_dip(self):
        """Test a scanline perpendicular to strike measures the slip of a dip slip fault directly."""
        geometry = ss.FaultSetProcessor(135.0).run(self.single_fault(45.0, scanline=135.0)).geometry
        row = geometry.iloc[0]
        self.assertAlmostEqual(row["scanlinePitch"], 90.0, places=9)
        self.assertAlmostEqual(row["trueDisplacement"], 10.0, places=9)
        self.assertAlmostEqual(row["heave"], 10.0 * np.cos(np.radians(45.0)), places=9)


class TestFaultSelection(unittest.TestCase):

    def test_select_faults(self):
        """Test faults are selected by their identifier, keeping table order."""
        faults = make_faults([1.0, 2.0, 3.0, 4.0])
        selected = ss.select_faults(faults, [4, 2])
        self.assertEqual(list(selected["number"]), [2, 4])
        with self.assertRaises(ss.InputSchemaViolation):
            ss.select_faults(faults, [2, 9])
        with self.assertRaises(ss.InputSchemaViolation):
            ss.select_faults(faults, [])

    def test_faults_near_azimuth(self):
        """Test the window mask compares dip directions axially."""
        faults = make_faults([1.0, 2.0, 3.0, 4.0])
        faults["dipDirection"] = [135.0, 165.0, 300.0, 40.0]
        mask = ss.faults_near_azimuth(faults, 135.0, tolerance=25.0)
        self.assertEqual(list(mask), [True, False, True, False])
        # The default window is the configured half width
        pd.testing.assert_series_equal(
            ss.faults_near_azimuth(faults, 135.0),
            ss.faults_near_azimuth(faults, 135.0, tolerance=load_config()["window_half_width"]),
        )
        self.assertEqual(list(ss.faults_near_azimuth(faults, 135.0, tolerance=30.0)), [True, True, True, False])


if __name__ == "__main__":
    unittest.main()
