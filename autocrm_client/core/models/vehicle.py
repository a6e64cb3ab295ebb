"""
Vehicle data models.
"""

from datetime import datetime
from typing import Dict, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..exceptions import VehicleValidationError


class Vehicle(BaseModel):
    """Vehicle as listed for the signed-in customer."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    brand: str
    model: str
    license_plate: str = Field(
        default="", validation_alias=AliasChoices("license_plate", "licensePlate")
    )
    vin: str = ""
    crm_number: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model} ({self.license_plate})"


class VehicleDetails(Vehicle):
    """Full vehicle record including owner and technical data."""

    name: Optional[str] = None
    surname: Optional[str] = None
    phone_number: Optional[str] = None
    vehicle_type: Optional[str] = None
    fuel_type: Optional[str] = None
    year: Optional[int] = None
    kilometers: Optional[float] = None


class VehicleForm(BaseModel):
    """Form data for registering or editing a vehicle."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    name: str = ""
    surname: str = ""
    phone_number: str = ""
    vin: str = ""
    license_plate: str = ""
    brand: str = ""
    model: str = ""
    vehicle_type: str = ""
    fuel_type: str = ""
    year: str = ""
    kilometers: str = ""

    @classmethod
    def from_details(cls, details: VehicleDetails) -> "VehicleForm":
        """Prefill the edit form from a stored vehicle."""
        return cls(
            name=details.name or "",
            surname=details.surname or "",
            phone_number=details.phone_number or "",
            vin=details.vin or "",
            license_plate=details.license_plate or "",
            brand=details.brand or "",
            model=details.model or "",
            vehicle_type=details.vehicle_type or "",
            fuel_type=details.fuel_type or "",
            year=str(details.year or datetime.now().year),
            kilometers=str(details.kilometers or 0),
        )

    def set_brand(self, brand: str) -> None:
        """Change the brand; the model belongs to the old brand and is cleared."""
        if brand != self.brand:
            self.brand = brand
            self.model = ""

    def errors(self, current_year: Optional[int] = None) -> Dict[str, str]:
        """Return field -> message for every invalid field."""
        current_year = current_year or datetime.now().year
        errors: Dict[str, str] = {}

        if self.year:
            try:
                year = int(self.year)
            except ValueError:
                year = None
            if year is None or year < 1900 or year > current_year:
                errors["year"] = f"Year must be between 1900 and {current_year}"

        if self.kilometers:
            try:
                kilometers = float(self.kilometers)
            except ValueError:
                kilometers = None
            if kilometers is None or kilometers < 0:
                errors["kilometers"] = "Kilometers must be a positive number"

        return errors

    def validate_form(self, current_year: Optional[int] = None) -> None:
        """Raise VehicleValidationError if any field is invalid."""
        errors = self.errors(current_year)
        if errors:
            raise VehicleValidationError(errors)
