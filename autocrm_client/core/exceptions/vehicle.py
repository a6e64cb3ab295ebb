"""
Vehicle-related exceptions.
"""

from typing import Dict


class VehicleValidationError(ValueError):
    """Exception raised when a vehicle form fails validation."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors
