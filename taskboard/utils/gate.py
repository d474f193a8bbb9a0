"""Edit capability gate: cookie in, yes/no out.

Reads are public. Mutations need a valid token in the edit cookie, which is
only ever issued by ``unlock`` with the exact shared password. Locking just
expires the cookie; a copied, unexpired token stays valid until it expires.
"""
import logging
from datetime import timedelta

from fastapi import Request, Response

import taskboard.config as _cfg
from taskboard.errors import EditForbidden
from taskboard.utils.auth import constant_time_equals, issue_token, verify_token
from taskboard.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


def _secret() -> str:
    return _cfg.EDIT_PASSWORD or ""


def can_edit(request: Request) -> bool:
    secret = _secret()
    if not secret:
        return False
    token = request.cookies.get(_cfg.EDIT_COOKIE_NAME)
    return verify_token(token, secret) is not None


def require_edit(request: Request) -> None:
    """FastAPI dependency guarding every mutation route."""
    if not can_edit(request):
        raise EditForbidden()


def unlock(password: str, response: Response) -> bool:
    secret = _secret()
    if not secret:
        logger.warning("unlock attempted but no edit password is configured")
        return False
    if not constant_time_equals(password or "", secret):
        logger.warning("unlock rejected: wrong password")
        return False

    issued = utcnow()
    token = issue_token(secret, now=issued)
    response.set_cookie(
        key=_cfg.EDIT_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=_cfg.COOKIE_SECURE,
        path="/",
        expires=issued + timedelta(days=_cfg.TOKEN_TTL_DAYS),
    )
    logger.info("board unlocked for editing")
    return True


def lock(response: Response) -> None:
    response.delete_cookie(
        key=_cfg.EDIT_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=_cfg.COOKIE_SECURE,
    )
