# checkout_api/models/user.py

from pydantic import BaseModel


# -------------------------------
# User Model
# -------------------------------

class User(BaseModel):
    """
    In-memory record for application users.
    Passwords are stored as given; the public view never exposes them.
    """
    id: int
    name: str
    email: str
    password: str

    def public(self) -> dict:
        return {"name": self.name, "email": self.email}
