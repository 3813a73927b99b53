"""
Label and description templates for generated privileges.

Each operation has a locale-indexed prefix ("Read", "Lire") and a description
template with a single ``{label}`` placeholder. Whether the description uses
the singular or plural resource label is fixed per operation below.
"""

import re
from typing import Dict, Iterable, List, Optional

from ..models import LabelValue, ResourceKind
from ..translations import translate
from .keys import generate_privilege_key
from .models import Privilege

DEFAULT_LOCALES = ("en", "fr")

# operation -> description substitutes the plural label
COLLECTION_USE_PLURAL: Dict[str, bool] = {
    "admin": True,
    "create": True,
    "delete": True,
    "read": False,
    "readVersions": True,
    "unlock": True,
    "update": False,
}

_SEPARATORS = re.compile(r"[-_]+")


def capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def slug_to_label(slug: str, plural: bool = False) -> str:
    """
    Derive a display label from a slug.

    Example:
        >>> slug_to_label("site-settings")
        'Site settings'
        >>> slug_to_label("post", plural=True)
        'Posts'
    """
    label = capitalize(_SEPARATORS.sub(" ", slug))
    return label + "s" if plural else label


def resolve_label(
    value: LabelValue,
    slug: str,
    locales: Iterable[str] = DEFAULT_LOCALES,
    plural: bool = False,
) -> Dict[str, str]:
    """
    Resolve a resource label into a complete locale map.

    Resolution order for each locale: explicit per-locale label, then the
    shared un-localized label (a plain string or the ``_default`` entry of a
    mapping), then a label derived from the slug.

    Args:
        value: Label as declared on the resource.
        slug: Resource slug used for the final fallback.
        locales: Locales that must be present in the result.
        plural: Derive a plural label from the slug when falling back.

    Returns:
        Mapping with every requested locale plus any locale the resource
        declared explicitly.
    """
    explicit: Dict[str, str] = {}
    shared: Optional[str] = None

    if isinstance(value, str) and value:
        shared = value
    elif isinstance(value, dict):
        explicit = {k: v for k, v in value.items() if k != "_default" and v}
        shared = value.get("_default") or None

    fallback = slug_to_label(slug, plural=plural)
    resolved: Dict[str, str] = {}
    for locale in _ordered_locales(locales, explicit):
        resolved[locale] = explicit.get(locale) or shared or fallback
    return resolved


def _ordered_locales(locales: Iterable[str], explicit: Dict[str, str]) -> List[str]:
    ordered = list(dict.fromkeys(locales))
    ordered.extend(locale for locale in explicit if locale not in ordered)
    return ordered


def _prefix_key(kind: ResourceKind, operation: str) -> str:
    if kind is ResourceKind.SINGLETON:
        return f"privilege-prefix-singleton-{operation}"
    return f"privilege-prefix-{operation}"


def _template_key(kind: ResourceKind, operation: str) -> str:
    if kind is ResourceKind.SINGLETON:
        return f"privilege-template-singleton-{operation}"
    return f"privilege-template-{operation}"


def uses_plural(kind: ResourceKind, operation: str) -> bool:
    """Whether the description for this operation uses the plural label."""
    if kind is ResourceKind.SINGLETON:
        return False
    return COLLECTION_USE_PLURAL.get(operation, False)


def render_operation_label(
    kind: ResourceKind, operation: str, label: Dict[str, str]
) -> Dict[str, str]:
    return {
        locale: f"{translate(_prefix_key(kind, operation), locale)} {text}"
        for locale, text in label.items()
    }


def render_operation_description(
    kind: ResourceKind,
    operation: str,
    singular: Dict[str, str],
    plural: Dict[str, str],
) -> Dict[str, str]:
    source = plural if uses_plural(kind, operation) else singular
    return {
        locale: translate(_template_key(kind, operation), locale, label=text.lower())
        for locale, text in source.items()
    }


def render_entry_description(kind: ResourceKind, label: Dict[str, str]) -> Dict[str, str]:
    """Description of a whole catalog entry ("Manage posts in the system")."""
    key = (
        "privilege-singleton-description"
        if kind is ResourceKind.SINGLETON
        else "privilege-collection-description"
    )
    return {
        locale: translate(key, locale, label=text.lower())
        for locale, text in label.items()
    }


def build_privilege(
    slug: str,
    kind: ResourceKind,
    operation: str,
    singular: Dict[str, str],
    plural: Dict[str, str],
) -> Privilege:
    """
    Build the generated privilege for one resource operation.

    Singletons have a single label; pass it as both ``singular`` and
    ``plural``.
    """
    return Privilege(
        privilege_key=generate_privilege_key(slug, operation),
        label=render_operation_label(kind, operation, singular),
        description=render_operation_description(kind, operation, singular, plural),
        is_custom=False,
    )
