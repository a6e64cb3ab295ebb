"""
CRM REST API access.
"""

from .service import ExternalAPIService

__all__ = ["ExternalAPIService"]
