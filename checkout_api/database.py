# checkout_api/database.py

from threading import Lock

from checkout_api.models import Product, User


SEED_USERS = [
    {"id": 1, "name": "Alice", "email": "alice@email.com", "password": "123456"},
    {"id": 2, "name": "Bob", "email": "bob@email.com", "password": "123456"},
]

# Catalog is read-only at runtime
products: list[Product] = [
    Product(id=1, price=100),
    Product(id=2, price=200),
]

users: list[User] = []

# Guards check-and-append on users
users_lock = Lock()


def init_db():
    with users_lock:
        users.clear()
        users.extend(User(**data) for data in SEED_USERS)


def get_product(product_id: int) -> Product | None:
    return next((p for p in products if p.id == product_id), None)


def next_user_id() -> int:
    return len(users) + 1
