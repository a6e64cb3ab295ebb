"""
Utility modules for the AutoCRM client.
"""

from .date import DateUtils
from .validation import ValidationUtils

__all__ = [
    "DateUtils",
    "ValidationUtils",
]
