"""Dispatcher configuration."""

import os
from typing import List, Optional

from pydantic import BaseModel


class DispatcherConfig(BaseModel):
    """Configuration for the dispatcher, its transport, and the webhook."""

    api_url: str = "https://graph.facebook.com"
    api_version: str = "v11.0"
    page_id: str = ""
    app_id: str = ""
    page_access_token: str = ""
    verify_token: str = ""
    app_url: str = ""                       # Public URL of this service
    default_locale: str = "en_US"
    log_level: str = "INFO"
    care_persona_id: Optional[str] = None   # Persona used by the help desk replies
    sequence_spacing_ms: int = 2000         # Gap between messages of a sequence

    @classmethod
    def from_env(cls) -> "DispatcherConfig":
        """Load configuration from environment variables with defaults."""
        return cls(
            api_url=os.getenv("API_URL", "https://graph.facebook.com"),
            api_version=os.getenv("API_VERSION", "v11.0"),
            page_id=os.getenv("PAGE_ID", ""),
            app_id=os.getenv("APP_ID", ""),
            page_access_token=os.getenv("PAGE_ACCESS_TOKEN", ""),
            verify_token=os.getenv("VERIFY_TOKEN", ""),
            app_url=os.getenv("APP_URL", ""),
            default_locale=os.getenv("DEFAULT_LOCALE", "en_US"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            care_persona_id=os.getenv("CARE_PERSONA_ID") or None,
        )

    @property
    def graph_url(self) -> str:
        return f"{self.api_url}/{self.api_version}"

    def missing_settings(self) -> List[str]:
        """Names of required credentials that are not set."""
        required = {
            "PAGE_ID": self.page_id,
            "APP_ID": self.app_id,
            "PAGE_ACCESS_TOKEN": self.page_access_token,
            "VERIFY_TOKEN": self.verify_token,
        }
        return [name for name, value in required.items() if not value]
