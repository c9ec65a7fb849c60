# checkout_api/api/checkout.py

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel, ConfigDict, Field

from checkout_api.core.auth import verify_token
from checkout_api.core.checkout import checkout as run_checkout
from checkout_api.core.errors import AuthenticationError, MissingTokenError, ShopError
from checkout_api.models import CheckoutItem


router = APIRouter(prefix="/api", tags=["checkout"])

# auto_error=False so a missing header maps to our own 401 message
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/users/login", auto_error=False)


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: list[CheckoutItem]
    freight: float = Field(..., allow_inf_nan=False)
    payment_method: str = Field(..., alias="paymentMethod")
    card_data: dict[str, Any] | None = Field(None, alias="cardData")


def get_current_user(token: str | None = Depends(oauth2_scheme)) -> dict:
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=MissingTokenError.message)

    payload = verify_token(token)
    if payload is None or payload.get("id") is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthenticationError.message)
    return payload


@router.post("/checkout")
def checkout(req: CheckoutRequest, current_user: dict = Depends(get_current_user)):
    try:
        result = run_checkout(
            current_user["id"],
            req.items,
            req.freight,
            req.payment_method,
            req.card_data,
        )
    except ShopError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return result.to_response()
