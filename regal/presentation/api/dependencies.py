from fastapi import Depends, Request

from ...application.services.token_service import TokenService
from ...core.dependencies import get_token_service
from ...domain.errors import MissingHeader, MissingToken
from ...domain.models import IdentityContext


def require_identity(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> IdentityContext:
    """Resolve the caller from ``Authorization: Bearer <token>`` or reject with 401.

    Only the token is consulted; the user store is not touched here.
    """
    header = request.headers.get("Authorization")
    if not header:
        raise MissingHeader()

    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise MissingToken()
    token = parts[1]

    claims = token_service.verify(token)
    identity = IdentityContext(
        subject_id=claims.subject_id,
        subject_email=claims.subject_email,
        token=token,
    )
    request.state.identity = identity
    return identity
