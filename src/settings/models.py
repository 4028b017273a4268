"""Data models for post-review configuration."""

from dataclasses import dataclass, field

from src.content_review.models import DetectorSettings, NormalizerSettings


@dataclass
class ReviewConfig:
    """Top-level configuration for the review tool.

    Attributes:
        detector: Thresholds and highlight style for change detection
        normalizer: Marker, budgets and roles for list repair
    """
    detector: DetectorSettings = field(default_factory=DetectorSettings)
    normalizer: NormalizerSettings = field(default_factory=NormalizerSettings)
