from __future__ import annotations

import logging
from jose import jwt
from jose.exceptions import JWTError, ExpiredSignatureError
from fastapi import HTTPException, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Any, Callable, Dict, Optional
from emoclass.core.config import settings

logger = logging.getLogger(__name__)
bearer = HTTPBearer(auto_error=False)

DEV_USER = {"user_id": "123e4567-e89b-12d3-a456-426614174000", "role": "teacher", "email": None}

def verify_token(token: str) -> Dict[str, Any]:
    """
    Verify an HS256 JWT issued for a teacher or admin account.
    """
    if not settings.JWT_SECRET:
        logger.error("JWT_SECRET is not configured; rejecting bearer token")
        raise HTTPException(status_code=401, detail="Token verification unavailable")
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=["HS256"],
            audience=settings.JWT_AUDIENCE,
            options={"verify_aud": "aud" in jwt.get_unverified_claims(token)},
        )
    except ExpiredSignatureError as exc:
        raise HTTPException(status_code=401, detail="Token has expired") from exc
    except JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}") from e

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing user ID")

    return {
        "user_id": user_id,
        "role": payload.get("role", "teacher"),
        "email": payload.get("email"),
    }

async def get_current_user(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Dict[str, Any]:
    """
    Resolve the caller from a bearer token. In dev mode a missing or
    unverifiable token falls back to a fixed teacher account.
    """
    if not creds or creds.scheme.lower() != "bearer":
        if settings.APP_ENV == "dev":
            logger.info("No credentials in dev mode, using dev teacher")
            return dict(DEV_USER)
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    try:
        return verify_token(creds.credentials)
    except HTTPException:
        if settings.APP_ENV == "dev":
            logger.info("Token verification failed in dev mode, using dev teacher")
            return dict(DEV_USER)
        raise

def require_role(*roles: str) -> Callable:
    async def _check(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if user.get("role") not in roles:
            logger.warning("User %s with role %s denied (needs %s)", user.get("user_id"), user.get("role"), roles)
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user
    return _check
