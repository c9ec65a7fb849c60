# checkout_api/core/errors.py


class ShopError(Exception):
    """Base for domain failures. The message is shown to API callers as-is."""

    message = "Erro inesperado"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ProductNotFoundError(ShopError):
    message = "Produto não encontrado"


class CardDataRequiredError(ShopError):
    message = "Dados do cartão obrigatórios para pagamento com cartão"


class EmailAlreadyRegisteredError(ShopError):
    message = "Email já cadastrado"


class InvalidCredentialsError(ShopError):
    message = "Credenciais inválidas"


class AuthenticationError(ShopError):
    message = "Token inválido"


class MissingTokenError(AuthenticationError):
    message = "Token não fornecido"
