"""
Error taxonomy for roles-privileges-py.

Invariant violations on the super-admin role carry the translation key as
their ``code`` so hosts can re-render the message in another locale.
"""

from typing import Optional

from .translations import translate


class RolesPrivilegesError(Exception):
    """Base error with an optional machine-readable code and HTTP status."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        if status_code is not None:
            self.status_code = status_code


class SuperAdminRoleError(RolesPrivilegesError):
    """Rejected delete or slug change of the super-admin role."""

    status_code = 400

    def __init__(self, code: str, locale: Optional[str] = None):
        super().__init__(translate(code, locale), code=code)
        self.locale = locale

    def localized(self, locale: str) -> str:
        """Render the message in another locale."""
        return translate(self.code, locale)


class RoleNotFoundError(RolesPrivilegesError):
    status_code = 404


class DuplicateRoleError(RolesPrivilegesError):
    status_code = 409


class PrincipalNotFoundError(RolesPrivilegesError):
    status_code = 404


class ConfigurationError(RolesPrivilegesError, ValueError):
    """Invalid plugin configuration detected at configuration time."""


__all__ = [
    "RolesPrivilegesError",
    "SuperAdminRoleError",
    "RoleNotFoundError",
    "DuplicateRoleError",
    "PrincipalNotFoundError",
    "ConfigurationError",
]
