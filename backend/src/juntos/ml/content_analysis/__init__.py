"""
Content Analysis package for opportunity categorization.
"""

from backend.src.juntos.ml.content_analysis.categorizer import (
    CATEGORY_NAMES,
    CategorySuggestion,
    OpportunityCategorizer,
)

__all__ = [
    "CATEGORY_NAMES",
    "CategorySuggestion",
    "OpportunityCategorizer",
]
