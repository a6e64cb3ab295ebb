"""
Vehicle service module.
"""

from .service import VehicleService

__all__ = ["VehicleService"]
