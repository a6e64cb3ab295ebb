"""
Newsletter subscription service.
"""

import logging
from typing import Dict

from ...core.models.newsletter import NewsletterSubscription
from ...utils.validation import ValidationUtils
from ..external import ExternalAPIService


logger = logging.getLogger(__name__)


class NewsletterService:
    """Service for newsletter subscriptions."""

    def __init__(self, external_api: ExternalAPIService):
        self.external_api = external_api

    async def subscribe(self, subscription: NewsletterSubscription) -> Dict:
        """
        Subscribe the customer to the newsletter.

        Raises:
            ValueError: if the e-mail address is missing or invalid
        """
        is_valid, error = ValidationUtils.validate_email(subscription.email)
        if not is_valid:
            raise ValueError(error)

        result = await self.external_api.subscribe_newsletter(subscription.to_payload())
        logger.info("Newsletter subscription for %s", ValidationUtils.mask_email(subscription.email))
        return result
