"""Exclusion rules for filtering path entries before tree insertion."""

from .base_rules import BaseExclusionRules
from .segment_rules import SegmentExclusionRules

__all__ = [
    "BaseExclusionRules",
    "SegmentExclusionRules",
]
