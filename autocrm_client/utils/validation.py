"""
Validation utilities for data validation and sanitization.
"""

import logging
import re
from typing import Any, Iterable, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationUtils:
    """Validation utilities for form fields."""

    @staticmethod
    def validate_email(email: str) -> Tuple[bool, Optional[str]]:
        """
        Validate e-mail address format.

        Args:
            email: Address to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not email:
            return False, "Email is required"
        if not _EMAIL_RE.match(email.strip()):
            return False, "Email address is not valid"
        return True, None

    @staticmethod
    def mask_email(email: Optional[str]) -> str:
        """Shorten an e-mail address for log output."""
        if not email or "@" not in email:
            return "<none>"
        local, _, domain = email.partition("@")
        return f"{local[:1]}***@{domain}"

    @staticmethod
    def sanitize_text(text: str) -> str:
        """
        Sanitize text by removing control characters.

        Args:
            text: Text to sanitize

        Returns:
            Sanitized text
        """
        if not text:
            return ""

        # Remove control characters except newlines and tabs
        text = re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", text)

        # Normalize whitespace
        text = re.sub(r"\s+", " ", text)

        return text.strip()

    @staticmethod
    def parse_records(model: Type[ModelT], items: Iterable[Any]) -> List[ModelT]:
        """Validate API records into models, skipping and logging malformed ones."""
        parsed = []
        for item in items:
            try:
                parsed.append(model.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping malformed %s record: %s", model.__name__, e)
        return parsed
