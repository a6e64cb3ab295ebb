"""
Vehicle service for registering and editing customer vehicles.
"""

import logging
from typing import Dict, List

from ...core.models.vehicle import Vehicle, VehicleDetails, VehicleForm
from ...utils.validation import ValidationUtils
from ..external import ExternalAPIService


logger = logging.getLogger(__name__)


class VehicleService:
    """Service for handling customer vehicles."""

    def __init__(self, external_api: ExternalAPIService):
        self.external_api = external_api

    async def list_vehicles(self) -> List[Vehicle]:
        items = await self.external_api.get_vehicles()
        return ValidationUtils.parse_records(Vehicle, items)

    async def get_vehicle(self, vehicle_id: int) -> VehicleDetails:
        """
        Load a vehicle with its owner and technical data.

        Args:
            vehicle_id: Vehicle identifier

        Returns:
            VehicleDetails for the vehicle

        Raises:
            NotFoundError: if the vehicle does not exist
        """
        data = await self.external_api.get_vehicle(vehicle_id)
        return VehicleDetails.model_validate(data)

    async def register_vehicle(self, form: VehicleForm, email: str) -> Dict:
        """
        Register a new vehicle for the customer.

        Args:
            form: Vehicle form data
            email: E-mail address of the owner

        Returns:
            API response payload

        Raises:
            VehicleValidationError: if the form is invalid; nothing is sent
        """
        form.validate_form()
        payload = self._payload(form)
        payload["email"] = email
        result = await self.external_api.create_vehicle(payload)
        logger.info("Registered vehicle %s %s", form.brand, form.license_plate)
        return result

    async def update_vehicle(self, vehicle_id: int, form: VehicleForm) -> Dict:
        form.validate_form()
        result = await self.external_api.update_vehicle(vehicle_id, self._payload(form))
        logger.info("Updated vehicle %s", vehicle_id)
        return result

    @staticmethod
    def _payload(form: VehicleForm) -> Dict:
        return {k: ValidationUtils.sanitize_text(v) for k, v in form.model_dump().items()}
