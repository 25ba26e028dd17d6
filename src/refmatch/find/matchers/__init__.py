"""Template matching implementations."""

from .similarity import (
    AbsoluteDifferenceMetric,
    SimilarityMetric,
    SquaredDifferenceMetric,
    get_metric,
)
from .template_matcher import TemplateMatcher, match
from .variants import TemplateVariant, reference_variants, rotate_image, to_compare_pixels

__all__ = [
    "TemplateMatcher",
    "match",
    "SimilarityMetric",
    "SquaredDifferenceMetric",
    "AbsoluteDifferenceMetric",
    "get_metric",
    "TemplateVariant",
    "reference_variants",
    "rotate_image",
    "to_compare_pixels",
]
