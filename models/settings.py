"""
models/settings.py
------------------
Process-wide user settings (single instance).
"""

from dataclasses import dataclass, field, replace

from config import DEFAULT_CURRENCY


@dataclass
class PersonalDetails:
    first_name: str = "John"
    last_name: str = "Doe"
    email: str = "john.doe@example.com"

    def to_record(self) -> dict:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
        }

    @classmethod
    def from_record(cls, record: dict) -> "PersonalDetails":
        defaults = cls()
        return cls(
            first_name=record.get("firstName", defaults.first_name),
            last_name=record.get("lastName", defaults.last_name),
            email=record.get("email", defaults.email),
        )


@dataclass
class Settings:
    """
    User preferences.

    Attributes:
        theme: 'light' or 'dark'.
        currency: ISO 4217 code used for display.
        personal_details: Name and email shown on the settings page.
    """
    theme: str = "light"
    currency: str = DEFAULT_CURRENCY
    personal_details: PersonalDetails = field(default_factory=PersonalDetails)

    @classmethod
    def defaults(cls) -> "Settings":
        return cls()

    def copy(self) -> "Settings":
        return replace(self, personal_details=replace(self.personal_details))

    def to_record(self) -> dict:
        return {
            "theme": self.theme,
            "currency": self.currency,
            "personalDetails": self.personal_details.to_record(),
        }

    @classmethod
    def from_record(cls, record: dict) -> "Settings":
        defaults = cls()
        return cls(
            theme=record.get("theme", defaults.theme),
            currency=record.get("currency", defaults.currency),
            personal_details=PersonalDetails.from_record(record.get("personalDetails") or {}),
        )
