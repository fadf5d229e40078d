import hmac
from typing import Optional

from fastapi import Header, Query

from .config import settings
from .exceptions import AdminAuthError


def verify_admin_secret(provided: Optional[str]) -> None:
    """
    Check an admin key against ADMIN_SECRET.

    No ADMIN_SECRET configured = development mode, everyone passes.
    """
    expected = settings.admin_secret
    if not expected:
        return

    if not isinstance(provided, str) or not provided:
        raise AdminAuthError()
    if not hmac.compare_digest(provided.encode(), expected.encode()):
        raise AdminAuthError()


def admin_secret_from_request(
    admin_secret: Optional[str] = Query(None, alias="adminSecret"),
    authorization: Optional[str] = Header(None),
) -> Optional[str]:
    """FastAPI dependency: key from ?adminSecret= or "Authorization: Bearer <key>"."""
    if admin_secret:
        return admin_secret
    if authorization and authorization.startswith("Bearer "):
        return authorization[len("Bearer "):]
    return None
