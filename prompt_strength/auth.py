"""
ADMIN AUTH - Shared-secret guard for rubric administration routes

Requests from a loopback peer address are trusted. Anything else must present
ADMIN_SECRET in the x-admin-secret header or the `secret` query parameter.
The Host header is client-controlled and plays no part in the decision.
"""

import secrets
from typing import Optional
from fastapi import Header, HTTPException, Query, Request
from prompt_strength import config

LOOPBACK_ADDRESSES = ("127.0.0.1", "::1")

def is_loopback(request: Request) -> bool:
    return request.client is not None and request.client.host in LOOPBACK_ADDRESSES

def require_admin(
    request: Request,
    x_admin_secret: Optional[str] = Header(None),
    secret: Optional[str] = Query(None),
) -> None:
    """FastAPI dependency; raises 403/401 when the caller may not administer the rubric."""
    if is_loopback(request):
        return

    if not config.ADMIN_SECRET:
        raise HTTPException(status_code=403, detail="Admin access not configured")

    provided = x_admin_secret or secret or ""
    if not secrets.compare_digest(provided.encode(), config.ADMIN_SECRET.encode()):
        raise HTTPException(status_code=401, detail="Unauthorized")
