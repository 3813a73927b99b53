"""
Configuration settings for roles-privileges-py.

This module defines the configuration schema using Pydantic settings,
supporting environment variables, .env files, and direct configuration.
"""

import warnings
from typing import List

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

from .translations import has_locale


class Settings(BaseSettings):
    """
    Configuration settings for the roles and privileges system.

    Environment Variable Mapping:
        All settings can be configured via environment variables by prefixing
        with 'ROLES_PRIVILEGES_' (e.g., ROLES_PRIVILEGES_DISABLED,
        ROLES_PRIVILEGES_EXCLUDE_COLLECTIONS='["media"]').

    Example:
        Generate the catalog without guarding anything yet:

        >>> settings = Settings(disabled=True)

        Keep a public collection out of the catalog:

        >>> settings = Settings(exclude_collections=["media"])
    """

    enable: bool = Field(
        default=True,
        description="Enable the plugin. When false, resources are returned untouched.",
    )
    disabled: bool = Field(
        default=False,
        description="Generate privileges and the roles resource but do not wrap access.",
    )

    # Scope
    exclude_collections: List[str] = Field(
        default_factory=list, description="Collection slugs left out of the catalog"
    )
    exclude_singletons: List[str] = Field(
        default_factory=list, description="Singleton slugs left out of the catalog"
    )
    internal_slugs: List[str] = Field(
        default_factory=lambda: [
            "payload-preferences",
            "payload-migrations",
            "payload-locked-documents",
        ],
        description="Host-internal resources never cataloged by late discovery",
    )

    # Access wrapping
    wrap_collection_access: bool = Field(
        default=True, description="Wrap collection access with generated privileges"
    )
    wrap_singleton_access: bool = Field(
        default=True, description="Wrap singleton access with generated privileges"
    )

    # Super admin
    seed_super_admin: bool = Field(
        default=True, description="Create or update the super-admin role on init"
    )
    roles_field_name: str = Field(
        default="roles", description="Principal attribute receiving role ids"
    )

    # Localization
    locales: List[str] = Field(
        default_factory=lambda: ["en", "fr"],
        description="Locales rendered in privilege labels and descriptions",
    )
    default_locale: str = Field(default="en", description="Locale of generated role text")

    warn_on_privilege_override: bool = Field(
        default=True,
        description="Log a warning when a custom privilege replaces a generated one",
    )

    # Development and debugging
    debug: bool = False
    """Enable debug logging of access decisions."""

    model_config = ConfigDict(
        env_file=".env",
        env_prefix="ROLES_PRIVILEGES_",
        case_sensitive=False,
        extra="forbid",
    )

    def validate_configuration(self) -> None:
        """
        Validate the current configuration for common issues.

        Raises:
            ValueError: If configuration is invalid.
        """
        if not self.locales:
            raise ValueError("At least one locale must be configured")

        if self.default_locale not in self.locales:
            raise ValueError(
                f"Invalid default_locale '{self.default_locale}'. "
                f"Must be one of: {self.locales}"
            )

        for locale in self.locales:
            if not has_locale(locale):
                warnings.warn(
                    f"No translations for locale '{locale}'; English text will be used.",
                    UserWarning,
                    stacklevel=2,
                )

        overlap = set(self.exclude_collections) & set(self.exclude_singletons)
        if overlap:
            warnings.warn(
                f"Slugs excluded as both collection and singleton: {sorted(overlap)}",
                UserWarning,
                stacklevel=2,
            )
