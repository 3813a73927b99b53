"""
FastAPI integration - dependencies guarding endpoints with privileges.

Authentication is the host's job: these dependencies expect the
authenticated principal on ``request.state.principal`` and a role store
either passed explicitly or available on ``request.app.state.role_store``.
"""

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from ..exceptions import RolesPrivilegesError, SuperAdminRoleError
from ..models import AccessContext, Principal, ResourceDescriptor
from .engine import Requirement, evaluate, normalize_requirement
from .models import AccessResult
from .wrapping import resolve_access

logger = logging.getLogger(__name__)


def get_current_principal(request: Request) -> Principal:
    """
    Extract the authenticated principal from request state.

    Raises:
        HTTPException: 401 if authentication is missing.
    """
    principal = getattr(request.state, "principal", None)
    if principal is None:
        logger.warning(
            "Principal not found in request state - authentication may not be configured",
            extra={"endpoint": request.url.path, "method": request.method},
        )
        raise HTTPException(status_code=401, detail="Authentication required")
    return principal


def _request_locale(request: Request) -> str:
    header = request.headers.get("accept-language", "")
    return header[:2].lower() if header else "en"


def _role_store(request: Request, role_store: Optional[Any]) -> Optional[Any]:
    if role_store is not None:
        return role_store
    return getattr(request.app.state, "role_store", None)


def require_privileges(requirement: Requirement, role_store: Optional[Any] = None):
    """
    FastAPI dependency requiring a DNF privilege requirement.

    Example:
        @app.delete("/posts/{post_id}")
        async def delete_post(
            post_id: str,
            _: None = require_privileges([["posts-delete"]]),
        ):
            pass
    """
    groups = normalize_requirement(requirement)

    async def check(request: Request) -> None:
        principal = get_current_principal(request)
        allowed = await evaluate(groups, principal, _role_store(request, role_store))
        if not allowed:
            logger.info(
                f"Privilege check failed for {principal.id} on {request.url.path}",
                extra={"principal_id": principal.id, "requirement": [list(g) for g in groups]},
            )
            raise HTTPException(status_code=403, detail="Insufficient privileges")

    return Depends(check)


def require_privilege(privilege_key: str, role_store: Optional[Any] = None):
    """FastAPI dependency requiring a single privilege."""
    return require_privileges([[privilege_key]], role_store)


def resource_access(
    resource: ResourceDescriptor, operation: str, role_store: Optional[Any] = None
):
    """
    FastAPI dependency evaluating a resource's (wrapped) access rule.

    Resolves to the ``AccessResult`` so a handler can apply a scoping
    filter; raises 403 when access is denied.
    """

    async def check(request: Request) -> AccessResult:
        ctx = AccessContext(
            principal=getattr(request.state, "principal", None),
            role_store=_role_store(request, role_store),
            locale=_request_locale(request),
            id=request.path_params.get("id"),
        )
        rule = resource.access.get(operation)
        if rule is None:
            return AccessResult.allow()
        result = await resolve_access(rule, ctx)
        if result.is_denied:
            raise HTTPException(
                status_code=403,
                detail=f"Access denied: {resource.slug}.{operation}",
            )
        return result

    return Depends(check)


def install_error_handler(app: FastAPI) -> FastAPI:
    """Render library errors as JSON using their status code and code."""

    @app.exception_handler(RolesPrivilegesError)
    async def handle_roles_privileges_error(request: Request, exc: RolesPrivilegesError):
        message = exc.message
        if isinstance(exc, SuperAdminRoleError):
            message = exc.localized(_request_locale(request))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.code, "detail": message},
        )

    return app
