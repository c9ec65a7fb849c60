# checkout_api/core/auth.py

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from checkout_api import database
from checkout_api.config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, SECRET_KEY
from checkout_api.models import User
from checkout_api.utils.logging import get_logger


logger = get_logger(__name__)


def find_user_by_email(email: str | None) -> User | None:
    if not email:
        return None
    return next((u for u in database.users if u.email == email), None)


def list_users() -> list[dict]:
    return [{"id": u.id, "name": u.name, "email": u.email} for u in database.users]


def register_user(name: str, email: str, password: str) -> dict | None:
    """
    Appends a new user with the next sequential id.
    Returns the public view (name and email only), or None when the email is taken.
    """
    with database.users_lock:
        if find_user_by_email(email):
            logger.info("Registration rejected, email already in use", email=email)
            return None

        user = User(id=database.next_user_id(), name=name, email=email, password=password)
        database.users.append(user)

    logger.info("User registered", user_id=user.id, email=user.email)
    return user.public()


def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"id": user.id, "email": user.email, "iat": issued_at, "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def authenticate(email: str | None, password: str | None) -> dict | None:
    user = find_user_by_email(email)
    if not user or password is None or user.password != password:
        logger.info("Login failed", email=email)
        return None
    return {"token": create_access_token(user)}


def verify_token(token: str | None) -> dict | None:
    if not token:
        return None
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.info("Token rejected", reason=str(e))
        return None
