from .analysis import AnalysisParameters, ElongationAnalysis
from .direction import direction_curve, find_elongation_direction, first_maximum
from .displacement import (
    SLIP_CASE_TERMS,
    SlipCase,
    apparent_displacement,
    apparent_displacements,
    classify_slip_case,
    true_displacement,
    true_displacements,
)
from .errors import (
    DegenerateGeometry,
    DegenerateProjection,
    InputSchemaViolation,
    InvalidExtrapolationModel,
    StrainScanError,
)
from .extrapolation import SmallFaultExtrapolator, extrapolated_heave, rank_heaves
from .faults import (
    FAULT_COLUMNS,
    ElongationDirection,
    ElongationResult,
    FractalFit,
    HeaveSummary,
    validate_fault_table,
)
from .heave import FaultSetProcessor, faults_near_azimuth, select_faults
from .transect import TransectProjector, percent_elongation, projected_length
from .util import (
    acute_angle,
    adjusted_dip,
    axial_difference,
    pitch_on_plane,
    plunge_of_pitch,
    vertical_section_pitch,
)
