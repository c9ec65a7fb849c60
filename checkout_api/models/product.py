# checkout_api/models/product.py

from pydantic import BaseModel, ConfigDict


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    price: float
