"""Shared-secret authentication for the gateway endpoints.

Authentication is opt-in: when no secret is configured every request is
authorized. Otherwise the presented credential must equal the secret.
"""

from typing import Any

from core.models.errors import AuthorizationError
from core.utils.constants import BEARER_PREFIX, QUERY_PARAM_PASSWORD
from core.utils.request import header, query_param


def is_authorized(secret: str | None, credential: str | None) -> bool:
    """Return True when `credential` grants access under `secret`."""
    if not secret:
        return True
    return credential == secret


def query_credential(event: dict[str, Any]) -> str | None:
    """Credential from the `pwd` query parameter (listing endpoint)."""
    return query_param(event, QUERY_PARAM_PASSWORD)


def query_or_bearer_credential(event: dict[str, Any]) -> str | None:
    """Credential from a non-empty `pwd` parameter, else a Bearer header."""
    pwd = query_param(event, QUERY_PARAM_PASSWORD)
    if pwd:
        return pwd

    authorization = header(event, "Authorization")
    if authorization and authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):].strip()

    return None


def require_authorized(secret: str | None, credential: str | None) -> None:
    """Raise AuthorizationError unless `credential` grants access."""
    if not is_authorized(secret, credential):
        raise AuthorizationError()
