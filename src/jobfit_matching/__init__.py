"""Job-to-candidate fit scoring."""

from jobfit_matching.features import extract_features
from jobfit_matching.matcher import AdvancedJobMatcher

__all__ = ["AdvancedJobMatcher", "extract_features"]
