"""
Localizer — maps message keys to user-facing strings.

Strings support `{name}` interpolation. Unknown locales fall back to the
default locale; unknown keys resolve to the key itself.
"""

from typing import Dict, Optional

from narrative_dispatch.i18n.catalog import CATALOGS
from narrative_dispatch.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_LOCALE = "en_US"


class Localizer:
    """Key → string lookup for one locale."""

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        catalogs: Optional[Dict[str, Dict[str, str]]] = None,
    ):
        self._catalogs = catalogs if catalogs is not None else CATALOGS
        if locale not in self._catalogs:
            logger.debug("No catalog for locale %s, using %s", locale, DEFAULT_LOCALE)
            locale = DEFAULT_LOCALE
        self.locale = locale

    def for_locale(self, locale: str) -> "Localizer":
        """A localizer sharing this one's catalogs, for another locale."""
        return Localizer(locale, self._catalogs)

    def t(self, key: str, **params) -> str:
        """Translate a key, interpolating any named parameters."""
        template = self._catalogs[self.locale].get(key)
        if template is None:
            template = self._catalogs.get(DEFAULT_LOCALE, {}).get(key)
        if template is None:
            logger.warning("Missing translation for %s (%s)", key, self.locale)
            return key
        if not params:
            return template
        return template.format(**params)
