# checkout_api/api/users.py

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from checkout_api.core.auth import authenticate, register_user
from checkout_api.core.errors import EmailAlreadyRegisteredError, InvalidCredentialsError


router = APIRouter(prefix="/api/users", tags=["users"])


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class PublicUser(BaseModel):
    name: str
    email: str


class RegisterResponse(BaseModel):
    user: PublicUser


class Token(BaseModel):
    token: str


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse)
def register(req: RegisterRequest):
    user = register_user(req.name, req.email, req.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EmailAlreadyRegisteredError.message)
    return {"user": user}


# Missing fields fall through to authenticate() and come back as 401
@router.post("/login", response_model=Token)
def login(req: LoginRequest):
    result = authenticate(req.email, req.password)
    if result is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=InvalidCredentialsError.message)
    return result
