"""
Localized string tables for privilege labels, descriptions and errors.

Lookups are total: a locale without a table, or a table without a key,
falls back to the English table.
"""

from typing import Dict, Optional

from .en import EN_TRANSLATIONS
from .fr import FR_TRANSLATIONS

FALLBACK_LOCALE = "en"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": EN_TRANSLATIONS,
    "fr": FR_TRANSLATIONS,
}


def has_locale(locale: str) -> bool:
    """Return True if an explicit table exists for the locale."""
    return locale in TRANSLATIONS


def translate(key: str, locale: Optional[str] = None, **params: str) -> str:
    """
    Look up a string and substitute ``{placeholder}`` parameters.

    Args:
        key: Translation key (e.g. "privilege-prefix-read").
        locale: Requested locale. Defaults to English.
        **params: Values substituted into the template.

    Returns:
        The rendered string. Unknown keys render as the key itself.
    """
    table = TRANSLATIONS.get(locale or FALLBACK_LOCALE, {})
    template = table.get(key)
    if template is None:
        template = EN_TRANSLATIONS.get(key, key)
    if not params:
        return template
    return template.format(**params)


__all__ = ["FALLBACK_LOCALE", "TRANSLATIONS", "has_locale", "translate"]
