from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from ..dependencies import get_current_user
from ..schemas.auth import AuthSession, AuthUser, LoginPayload, SignupPayload
from ..supabase_client import get_supabase_anon_client

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_user(user) -> dict:
    metadata = user.user_metadata or {}
    return {"id": user.id, "email": user.email, "name": metadata.get("name")}


@router.post("/login", response_model=AuthSession)
def login(payload: LoginPayload, supabase: Client = Depends(get_supabase_anon_client)):
    try:
        res = supabase.auth.sign_in_with_password(
            {"email": payload.email, "password": payload.password}
        )
    except Exception as e:
        raise HTTPException(status_code=401, detail=str(e)) from e

    if not res.session or not res.user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return {
        "access_token": res.session.access_token,
        "user": _auth_user(res.user),
    }


@router.post("/signup", response_model=AuthSession)
def signup(payload: SignupPayload, supabase: Client = Depends(get_supabase_anon_client)):
    try:
        res = supabase.auth.sign_up(
            {
                "email": payload.email,
                "password": payload.password,
                "options": {"data": {"name": payload.name}},
            }
        )
    except Exception as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    if not res.user:
        raise HTTPException(status_code=400, detail="Unable to sign up")

    # No session until the email is confirmed, when confirmation is on.
    return {
        "access_token": res.session.access_token if res.session else "",
        "user": _auth_user(res.user),
    }


@router.get("/me", response_model=AuthUser)
def me(user=Depends(get_current_user)):
    return user
