"""
Translation of user facing strings, using gettext catalogs (.mo files).

Each plugin has its own text domain (catalog) and loads it itself, usually on the init hook.
Strings from a text domain that was never loaded, or with no translation, are returned untranslated.
"""

import gettext
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class TextDomainRegistry:
    """Loaded translation catalogs, by text domain."""

    def __init__(self) -> None:
        self._catalogs: dict[str, gettext.NullTranslations] = {}

    def load_textdomain(self, domain: str, mofile: Path) -> bool:
        """Load a catalog file for the text domain. Returns False if there is no such file."""
        if not mofile.is_file():
            logger.debug(f"No translation catalog found for text domain '{domain}' at: {mofile}")
            return False

        with open(mofile, "rb") as f:
            self._catalogs[domain] = gettext.GNUTranslations(f)
        logger.info(f"Loaded translation catalog for text domain '{domain}' from: {mofile}")
        return True

    def load_default_textdomain(self, domain: str, languages_dir: Path, locale: str) -> bool:
        """
        Load the catalog shipped with a plugin, from the standard gettext layout:
        <languages_dir>/<locale>/LC_MESSAGES/<domain>.mo

        If no catalog exists the text domain is still marked as loaded (with no translations),
        and False is returned.
        """
        catalog = gettext.translation(domain, localedir=languages_dir, languages=[locale], fallback=True)
        self._catalogs[domain] = catalog
        found = isinstance(catalog, gettext.GNUTranslations)
        if found:
            logger.info(f"Loaded default translation catalog for text domain '{domain}', locale: {locale}")
        else:
            logger.debug(f"No default translation catalog for text domain '{domain}', locale: {locale}")
        return found

    def is_loaded(self, domain: str) -> bool:
        return domain in self._catalogs

    def translate(self, text: str, domain: str) -> str:
        """Translate text using the text domain's catalog."""
        catalog = self._catalogs.get(domain)
        if catalog is None:
            return text
        return catalog.gettext(text)

    def translate_with_context(self, text: str, context: str, domain: str) -> str:
        """Translate text which has a context, for strings that are translated differently depending on use."""
        catalog = self._catalogs.get(domain)
        if catalog is None:
            return text
        return catalog.pgettext(context, text)
