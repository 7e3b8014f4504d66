class AnalyticsError(Exception):
    """Base for all analytics errors."""


class BaselineConfigurationError(AnalyticsError):
    """Baseline table is empty or unusable when strokes gained is requested."""


class TeeContextError(AnalyticsError):
    """Tee segment cannot be resolved for the given tee."""


class CopyGuardViolation(AnalyticsError):
    """Rendered copy failed validation and no safe fallback passed either."""
