"""
JWT Authentication middleware for Supabase Auth.

Validates the caller's Supabase JWT and keeps the raw token so it can be
forwarded to the location registry on the caller's behalf.
"""

from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shootplan.config import get_settings

# Optional bearer token - scheduling works anonymously against public registries
optional_security = HTTPBearer(auto_error=False)


@dataclass
class AuthenticatedUser:
    user_id: str
    access_token: str


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> Optional[AuthenticatedUser]:
    """
    Optionally validate Supabase JWT and return the caller.

    Returns None if no token provided. A token that is present but invalid
    is rejected with 401.

    Usage:
        @router.post("/generate")
        async def generate(user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
            token = user.access_token if user else ""
    """
    if credentials is None:
        return None
    token = credentials.credentials
    return AuthenticatedUser(user_id=_validate_token(token), access_token=token)


def _validate_token(token: str) -> str:
    """
    Validate a Supabase JWT and extract the user_id.

    Args:
        token: The JWT access token from the Authorization header

    Returns:
        The user_id (UUID string) from the 'sub' claim

    Raises:
        HTTPException(401): If token is invalid, expired, or missing required claims
    """
    jwt_secret = get_settings().supabase_jwt_secret

    if not jwt_secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server auth configuration error",
        )

    try:
        # Supabase signs with HS256 for the 'authenticated' audience
        payload = jwt.decode(
            token,
            jwt_secret,
            algorithms=["HS256"],
            audience="authenticated",
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidAudienceError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token audience",
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing user identifier",
        )
    return user_id
