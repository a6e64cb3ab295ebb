"""
Campaign service module.
"""

from .service import CampaignService

__all__ = ["CampaignService"]
