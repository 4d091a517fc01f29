"""
Data preparation — loading risk-score history exports and validating them.
"""

from .loader import history_to_series, load_history_csv
from .validators import ValidationResult, validate_history

__all__ = [
    "history_to_series",
    "load_history_csv",
    "ValidationResult",
    "validate_history",
]
