# checkout_api/models/checkout.py

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CheckoutItem(BaseModel):
    """
    A single cart line. Quantity is taken as sent, zero and negative included.
    Unknown keys are kept so they can be echoed back in the result.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    product_id: int = Field(..., alias="productId")
    quantity: int


class CheckoutResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Any = Field(..., alias="userId")
    items: list[CheckoutItem]
    freight: float
    payment_method: str = Field(..., alias="paymentMethod")
    total: float

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)
