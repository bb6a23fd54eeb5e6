"""
Cart errors and user-facing messages.

Exceptions never leave a CartEngine operation; they are converted into a
CartResult and the messages below are what the notification layer shows.
"""


class CartError(Exception):
    """Base class for cart errors."""


class ExternalServiceError(CartError):
    """Shop API (stock or catalog) request failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class CartDecodeError(CartError):
    """Persisted cart snapshot could not be decoded."""


# Messages per language. Keys: <operation>_<outcome>.
MESSAGES: dict[str, dict[str, str]] = {
    "pt": {
        "add_success": "Produto adicionado com sucesso!",
        "remove_success": "Produto removido do carrinho",
        "update_success": "Quantidade do produto atualizada",
        "stock_exceeded": "Quantidade solicitada fora de estoque",
        "add_failed": "Erro na adição do produto",
        "remove_failed": "Erro na remoção do produto",
        "update_failed": "Erro na alteração de quantidade do produto",
    },
    "en": {
        "add_success": "Product added to cart",
        "remove_success": "Product removed from cart",
        "update_success": "Product quantity updated",
        "stock_exceeded": "Requested quantity is out of stock",
        "add_failed": "Failed to add product",
        "remove_failed": "Failed to remove product",
        "update_failed": "Failed to change product quantity",
    },
}

DEFAULT_LANGUAGE = "pt"


def get_message(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Return the message for key, falling back to the default language."""
    lang = (language or DEFAULT_LANGUAGE).split("-")[0].lower()
    table = MESSAGES.get(lang, MESSAGES[DEFAULT_LANGUAGE])
    return table.get(key, MESSAGES[DEFAULT_LANGUAGE][key])