from .baselines import build_baseline_table, interpolate_baseline, load_baseline_table
from .exceptions import (
    AnalyticsError,
    BaselineConfigurationError,
    CopyGuardViolation,
    TeeContextError,
)
from .handicap import (
    calculate_handicap_index,
    calculate_net_score,
    calculate_score_differential,
    handicap_from_differentials,
)
from .modes import double_nine_hole_round, normalize_rounds_by_mode, normalize_rounds_for_handicap
from .overall import (
    compute_data_hash,
    compute_mode_summary,
    compute_overall_summaries,
)
from .strokes_gained import (
    apply_strokes_gained,
    calculate_strokes_gained,
    strokes_gained_for_round,
)
from .tee_context import (
    context_for_stored_round,
    get_valid_tee_segments,
    holes_played_for_segment,
    resolve_tee_context,
)

__all__ = [
    "build_baseline_table",
    "interpolate_baseline",
    "load_baseline_table",
    "AnalyticsError",
    "BaselineConfigurationError",
    "CopyGuardViolation",
    "TeeContextError",
    "calculate_handicap_index",
    "calculate_net_score",
    "calculate_score_differential",
    "handicap_from_differentials",
    "double_nine_hole_round",
    "normalize_rounds_by_mode",
    "normalize_rounds_for_handicap",
    "compute_data_hash",
    "compute_mode_summary",
    "compute_overall_summaries",
    "apply_strokes_gained",
    "calculate_strokes_gained",
    "strokes_gained_for_round",
    "context_for_stored_round",
    "get_valid_tee_segments",
    "holes_played_for_segment",
    "resolve_tee_context",
]
