"""
Format Validation Rules

String formats: email, url, domain, date and phone numbers.
"""

import json
import re
from datetime import date, datetime
from typing import Any, Optional
from urllib.parse import urlparse

import phonenumbers
from phonenumbers import NumberParseException

from .base import ValidationRule

_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"


class EmailValidationRule(ValidationRule):
    error_message = "The value must be a valid email address."
    _pattern = re.compile(
        r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@" + _LABEL + r"(?:\." + _LABEL + r")+"
    )

    def passes(self, value: Any) -> bool:
        return isinstance(value, str) and self._pattern.fullmatch(value) is not None


class DomainNameValidationRule(ValidationRule):
    """Host names with at least one dot and an alphabetic TLD of 2-6 letters."""

    error_message = "The value must be a valid domain name."
    _pattern = re.compile(r"(?:" + _LABEL + r"\.)+[A-Za-z]{2,6}")

    def passes(self, value: Any) -> bool:
        return (
            isinstance(value, str)
            and len(value) <= 253
            and self._pattern.fullmatch(value) is not None
        )


class URLValidationRule(ValidationRule):
    """Absolute URLs: a scheme and a host are both required."""

    error_message = "The value must be a valid URL."

    def passes(self, value: Any) -> bool:
        if not isinstance(value, str) or not value or any(c.isspace() for c in value):
            return False
        try:
            parsed = urlparse(value)
        except ValueError:
            return False
        return bool(parsed.scheme) and bool(parsed.netloc)


class DateValidationRule(ValidationRule):
    """
    Date values.

    With a format argument (`date:%Y-%m-%d`) the value must be a string in
    that strptime format. Without one, the rule accepts date/datetime
    objects, numeric timestamps, ISO 8601 strings, JSON object strings such
    as `{"year": 2022, "month": 1, "day": 1}` and `[month, day, year]`
    sequences.
    """

    error_message = "The value must be a valid date."

    def __init__(self, date_format: Optional[str] = None):
        self.date_format = date_format or None

    def passes(self, value: Any) -> bool:
        if self.date_format is not None:
            if not isinstance(value, str):
                return False
            try:
                datetime.strptime(value, self.date_format)
            except ValueError:
                return False
            return True

        if isinstance(value, (date, datetime)):
            return True
        if isinstance(value, bool):
            return False
        if isinstance(value, (int, float)):
            try:
                datetime.fromtimestamp(value)
            except (OverflowError, OSError, ValueError):
                return False
            return True
        if isinstance(value, (list, tuple)):
            return self._is_calendar_date(value)
        if isinstance(value, str):
            return self._is_iso_string(value) or self._is_json_date(value)
        return False

    @staticmethod
    def _is_calendar_date(parts) -> bool:
        if len(parts) != 3 or not all(isinstance(p, int) and not isinstance(p, bool) for p in parts):
            return False
        month, day, year = parts
        try:
            date(year, month, day)
        except (OverflowError, ValueError):
            return False
        return True

    @staticmethod
    def _is_iso_string(value: str) -> bool:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            datetime.fromisoformat(text)
        except ValueError:
            return False
        return True

    @staticmethod
    def _is_json_date(value: str) -> bool:
        try:
            parts = json.loads(value)
        except ValueError:
            return False
        if not isinstance(parts, dict):
            return False
        fields = [parts.get("year"), parts.get("month"), parts.get("day")]
        if not all(isinstance(p, int) and not isinstance(p, bool) for p in fields):
            return False
        year, month, day = fields
        try:
            date(year, month, day)
        except (OverflowError, ValueError):
            return False
        return True

    def get_error_message(self) -> str:
        if self.date_format:
            return f"The value must be a valid date in the format {self.date_format}."
        return self.error_message


class PhoneNumberValidationRule(ValidationRule):
    """
    Phone numbers valid for a region (`phone:ZM`).

    Numbers without a leading + are read in the region's national format.
    Without a region only international numbers can be parsed, and any
    valid number passes.
    """

    def __init__(self, region_code: Optional[str] = None):
        self.region_code = region_code.upper() if region_code else None
        if self.region_code is not None and self.region_code not in phonenumbers.SUPPORTED_REGIONS:
            raise ValueError(f"Unknown phone number region '{region_code}'")

    def passes(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        try:
            number = phonenumbers.parse(value, self.region_code)
        except NumberParseException:
            return False

        if self.region_code is None:
            return phonenumbers.is_valid_number(number)
        return phonenumbers.is_valid_number_for_region(number, self.region_code)

    def get_error_message(self) -> str:
        if self.region_code:
            return f"The value must be a valid phone number for region {self.region_code}."
        return "The value must be a valid phone number."
