"""
External API service for handling all CRM REST API calls.
"""

import logging
from typing import Any, Dict, List, Optional
import httpx

from ...config import ExternalAPIConfig, get_settings
from ...core.exceptions import (
    AuthError,
    NetworkError,
    NotFoundError,
    QuotaExceededError,
    RequestRejectedError,
    ServerError,
)


logger = logging.getLogger(__name__)

QUOTA_EXCEEDED_CODE = "QUOTA_EXCEEDED"


class ExternalAPIService:
    """Service for handling CRM API calls."""

    def __init__(self, config: Optional[ExternalAPIConfig] = None, token: Optional[str] = None):
        self.config = config or ExternalAPIConfig.from_settings(get_settings())
        self.token = token if token is not None else self.config.api_token
        self.timeout = self.config.timeout

    def set_token(self, token: Optional[str]) -> None:
        """Replace the bearer token, e.g. after the user signs in again."""
        self.token = token

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if extra:
            headers.update(extra)
        return headers

    async def _make_request(
        self,
        method: str,
        url: str,
        json: Optional[Dict] = None,
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None,
    ) -> Any:
        """Make HTTP request with error handling."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json,
                    params=params,
                    headers=self._headers(headers),
                )
        except httpx.TimeoutException:
            logger.warning("%s %s timed out after %ss", method, url, self.timeout)
            raise NetworkError("Request timed out")
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(f"Request failed: {e}")

        self._raise_for_status(method, url, response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.error("%s %s returned invalid JSON", method, url)
            raise ServerError("Malformed response from server", response.status_code)

    def _raise_for_status(self, method: str, url: str, response: httpx.Response) -> None:
        """Map an error response onto the client exception hierarchy."""
        status = response.status_code
        if status < 400:
            return

        body = self._error_body(response)
        message = body.get("message") or body.get("error") or f"HTTP error {status}"
        logger.warning("%s %s failed: status=%s message=%s", method, url, status, message)

        if status in (401, 403):
            raise AuthError("Session expired. Please sign in again.", status)
        if status == 409 or body.get("code") == QUOTA_EXCEEDED_CODE:
            raise QuotaExceededError(message, status)
        if status == 404:
            raise NotFoundError(message, status)
        if status >= 500:
            raise ServerError(message, status)
        raise RequestRejectedError(message, status)

    @staticmethod
    def _error_body(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    @staticmethod
    def _as_list(result: Any) -> List[Dict]:
        return [item for item in result if isinstance(item, dict)] if isinstance(result, list) else []

    # Vehicles

    async def get_vehicles(self) -> List[Dict]:
        """Get the signed-in customer's vehicles."""
        result = await self._make_request("GET", self.config.get_vehicles_url())
        return self._as_list(result)

    async def get_vehicle(self, vehicle_id: int) -> Dict:
        result = await self._make_request("GET", self.config.get_vehicle_url(vehicle_id))
        if not isinstance(result, dict):
            raise NotFoundError(f"Vehicle {vehicle_id} not found")
        return result

    async def create_vehicle(self, data: Dict) -> Dict:
        """Register a new vehicle."""
        result = await self._make_request("POST", self.config.get_vehicles_url(), json=data)
        return result or {}

    async def update_vehicle(self, vehicle_id: int, data: Dict) -> Dict:
        result = await self._make_request(
            "PUT", self.config.get_vehicle_url(vehicle_id), json=data
        )
        return result or {}

    # Booking

    async def get_branches(self) -> List[Dict]:
        result = await self._make_request("GET", self.config.get_branches_url())
        return self._as_list(result)

    async def get_service_types(self) -> List[Dict]:
        result = await self._make_request("GET", self.config.get_service_types_url())
        return self._as_list(result)

    async def get_time_slots(self, branch_id: int, date: str) -> List[Dict]:
        """Get time slots for a branch on a YYYY-MM-DD date."""
        params = {"branchId": branch_id, "date": date}
        result = await self._make_request("GET", self.config.get_time_slots_url(), params=params)
        return self._as_list(result)

    async def create_booking(self, data: Dict) -> Dict:
        """Create booking via the CRM API."""
        result = await self._make_request("POST", self.config.get_bookings_url(), json=data)
        return result if isinstance(result, dict) else {}

    # Campaigns

    async def get_campaigns(self, email: str) -> List[Dict]:
        result = await self._make_request(
            "GET", self.config.get_campaigns_url(), params={"email": email}
        )
        return self._as_list(result)

    async def book_campaign(self, campaign_id: int, email: str) -> Dict:
        url = self.config.get_campaign_action_url(campaign_id, "book")
        return await self._make_request("POST", url, json={"email": email}) or {}

    async def cancel_campaign(self, campaign_id: int, email: str) -> Dict:
        url = self.config.get_campaign_action_url(campaign_id, "cancel")
        return await self._make_request("POST", url, json={"email": email}) or {}

    # Notifications

    async def get_notifications(self, email: str) -> List[Dict]:
        result = await self._make_request("GET", self.config.get_notifications_url(email))
        return self._as_list(result)

    async def mark_notification_read(self, notification_id: int) -> None:
        await self._make_request("POST", self.config.get_mark_read_url(notification_id))

    # Newsletter

    async def subscribe_newsletter(self, data: Dict) -> Dict:
        """Subscribe an e-mail address to the newsletter."""
        return await self._make_request("POST", self.config.get_newsletter_url(), json=data) or {}
