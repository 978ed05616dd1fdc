"""User — the person on the other end of the conversation."""

from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    """A Messenger user, keyed by page-scoped ID."""

    psid: str                               # Page-scoped ID, the delivery routing key
    first_name: str = ""
    last_name: str = ""
    locale: str = "en_US"
    timezone: Optional[float] = None        # Hours offset from UTC
    gender: str = "neutral"

    def apply_profile(self, profile: dict) -> None:
        """Copy the fields of a Graph API profile lookup onto this user."""
        self.first_name = profile.get("first_name", self.first_name)
        self.last_name = profile.get("last_name", self.last_name)
        self.locale = profile.get("locale", self.locale)
        self.timezone = profile.get("timezone", self.timezone)
        self.gender = profile.get("gender", self.gender)
