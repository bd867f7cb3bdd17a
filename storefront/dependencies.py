from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client

from .supabase_client import get_supabase_client
from .utils.logging import get_logger

security = HTTPBearer(auto_error=False)
logger = get_logger(__name__)


def _user_from_token(supabase: Client, token: str) -> dict | None:
    """Resolve a Supabase access token to the user dict the routers use."""
    user_response = supabase.auth.get_user(token)
    if not user_response or not user_response.user:
        return None

    supa_user = user_response.user
    metadata = supa_user.user_metadata or {}
    return {
        "id": supa_user.id,
        "email": supa_user.email,
        "name": metadata.get("name") or metadata.get("full_name") or "",
    }


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(security),
    supabase: Client = Depends(get_supabase_client),
):
    """
    Validates the incoming Supabase access token and returns the user object.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    try:
        user = _user_from_token(supabase, credentials.credentials)
    except Exception as exc:
        raise HTTPException(status_code=401, detail="Session expired. Please sign in again.") from exc

    if user is None:
        raise HTTPException(status_code=401, detail="Session expired. Please sign in again.")
    return user


def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Security(security),
    supabase: Client = Depends(get_supabase_client),
):
    """
    Returns the user object if authenticated, otherwise returns None.
    Does NOT raise 401.
    """
    if credentials is None:
        return None

    try:
        return _user_from_token(supabase, credentials.credentials)
    except Exception as exc:
        logger.debug("Ignoring invalid bearer token: {}", exc)
        return None
