# -*- coding: utf-8 -*-

"""
StrainScan Transect Elongation Library
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

StrainScan estimates the one dimensional elongation of a geological transect from a catalog of
fault planes, their measured offsets and the bedding they displace.
Basic usage:

   >>> import strainscan
   >>> fm = strainscan.FileManager(base_dir="data")
   >>> analysis = strainscan.model.ElongationAnalysis(fm.load_faults("faults.csv"),
   ...                                                 fm.load_faults("faults_bounded.csv"))
   >>> direction = analysis.find_direction()
   >>> params = strainscan.model.AnalysisParameters(azimuth=direction.azimuth, half_length=81,
   ...                                              a_angles=(53, 101), b_angles=(23, 78),
   ...                                              regression_window=(2, 9))
   >>> result = analysis.run(params, direction=direction)
   >>> print(result.report())

The direction curve and the frequency-size plot used to choose the parameters are drawn with:

   >>> strainscan.plot.direction_curve_view(direction)
   >>> strainscan.plot.frequency_size_view(result.fit)


"""

__title__ = "StrainScan"

import strainscan.model as model
import strainscan.plot as plot
from strainscan.config import load_config
from strainscan.filemanagement import FileManager

# This controls the import behaviour when using `from strainscan import *`
__all__ = ["model", "plot", "load_config", "FileManager"]
