# checkout_api/api/graphql.py

from dataclasses import asdict

from fastapi import Request, Response
from fastapi.security.utils import get_authorization_scheme_param
import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from checkout_api.core import auth
from checkout_api.core.checkout import checkout as run_checkout
from checkout_api.core.errors import (
    AuthenticationError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    MissingTokenError,
)


# -------------------------------
# Types
# -------------------------------

@strawberry.type
class User:
    id: strawberry.ID
    name: str
    email: str


@strawberry.type
class AuthPayload:
    token: str


@strawberry.type
class CheckoutItem:
    product_id: int
    quantity: int


@strawberry.type
class CheckoutResult:
    user_id: strawberry.ID
    items: list[CheckoutItem]
    freight: float
    payment_method: str
    valor_final: float


@strawberry.input
class CheckoutItemInput:
    product_id: int
    quantity: int


@strawberry.input
class CardDataInput:
    number: str | None = None
    name: str | None = None
    expiry: str | None = None
    cvv: str | None = None


def current_user(info: Info) -> dict:
    """Resolves the caller from the request's Bearer header, or raises."""
    request = info.context["request"]
    scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
    if not token or scheme.lower() != "bearer":
        raise MissingTokenError()
    payload = auth.verify_token(token)
    if payload is None or payload.get("id") is None:
        raise AuthenticationError()
    return payload


# -------------------------------
# Resolvers
# -------------------------------

@strawberry.type
class Query:
    @strawberry.field
    def users(self) -> list[User]:
        return [User(id=strawberry.ID(str(u["id"])), name=u["name"], email=u["email"]) for u in auth.list_users()]


@strawberry.type
class Mutation:
    @strawberry.mutation
    def register(self, name: str, email: str, password: str) -> User:
        created = auth.register_user(name, email, password)
        if created is None:
            raise EmailAlreadyRegisteredError()
        user = auth.find_user_by_email(email)
        return User(id=strawberry.ID(str(user.id)), name=user.name, email=user.email)

    @strawberry.mutation
    def login(self, email: str, password: str) -> AuthPayload:
        result = auth.authenticate(email, password)
        if result is None:
            raise InvalidCredentialsError()
        return AuthPayload(token=result["token"])

    @strawberry.mutation
    def checkout(
        self,
        info: Info,
        items: list[CheckoutItemInput],
        freight: float,
        payment_method: str,
        card_data: CardDataInput | None = None,
    ) -> CheckoutResult:
        user = current_user(info)
        result = run_checkout(
            user["id"],
            [{"productId": i.product_id, "quantity": i.quantity} for i in items],
            freight,
            payment_method,
            asdict(card_data) if card_data is not None else None,
        )
        return CheckoutResult(
            user_id=strawberry.ID(str(result.user_id)),
            items=[CheckoutItem(product_id=i.product_id, quantity=i.quantity) for i in result.items],
            freight=result.freight,
            payment_method=result.payment_method,
            valor_final=result.total,
        )


schema = strawberry.Schema(query=Query, mutation=Mutation)


def get_context(request: Request, response: Response) -> dict:
    # process_result only sees the request, so keep the response reachable from it
    request.state.graphql_response = response
    return {}


class ShopGraphQLRouter(GraphQLRouter):
    """Answers 400 when the operation never reached a resolver (syntax, validation, variables)."""

    async def process_result(self, request: Request, result):
        if result.errors and all(error.path is None for error in result.errors):
            request.state.graphql_response.status_code = 400
        return await super().process_result(request, result)


router = ShopGraphQLRouter(schema, context_getter=get_context)
