from pydantic import BaseModel, EmailStr


class AuthUser(BaseModel):
    id: str
    email: EmailStr | None = None
    name: str | None = None


class AuthSession(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: AuthUser


class LoginPayload(BaseModel):
    email: EmailStr
    password: str


class SignupPayload(BaseModel):
    email: EmailStr
    password: str
    name: str
