"""
Campaign service for listing, booking and cancelling service campaigns.
"""

import logging

from ...core.models.campaign import Campaign, CampaignBoard
from ...utils.validation import ValidationUtils
from ..external import ExternalAPIService


logger = logging.getLogger(__name__)


class CampaignService:
    """Service for handling maintenance campaigns."""

    def __init__(self, external_api: ExternalAPIService):
        self.external_api = external_api

    async def list_campaigns(self, email: str) -> CampaignBoard:
        """Load the campaigns for a customer, split by booking status."""
        items = await self.external_api.get_campaigns(email)
        campaigns = [Campaign.from_api(item) for item in items]
        logger.debug(
            "Loaded %d campaigns for %s", len(campaigns), ValidationUtils.mask_email(email)
        )
        return CampaignBoard.from_campaigns(campaigns)

    async def book(self, board: CampaignBoard, campaign: Campaign, email: str) -> None:
        """Book a campaign and move it to the active list."""
        await self.external_api.book_campaign(campaign.id, email)
        board.mark_booked(campaign)

    async def cancel(self, board: CampaignBoard, campaign: Campaign, email: str) -> None:
        """Cancel a booked campaign and move it back to the available list."""
        await self.external_api.cancel_campaign(campaign.id, email)
        board.mark_cancelled(campaign)
