"""Maps cart results to user messages and forwards them to a NotificationSink."""
from rocketcart import config
from rocketcart.errors import get_message
from rocketcart.logging import get_logger
from .models import CartOperation, CartOutcome, CartResult
from .ports import NotificationSink

logger = get_logger(__name__)

_SUCCESS_KEYS = {
    CartOperation.ADD: "add_success",
    CartOperation.REMOVE: "remove_success",
    CartOperation.UPDATE: "update_success",
}

_FAILURE_KEYS = {
    CartOperation.ADD: "add_failed",
    CartOperation.REMOVE: "remove_failed",
    CartOperation.UPDATE: "update_failed",
}


class CartNotifier:
    def __init__(self, sink: NotificationSink, language: str = config.CART_LANGUAGE):
        self.sink = sink
        self.language = language

    def message_for(self, result: CartResult) -> str | None:
        """Message for result, or None when nothing should be shown."""
        if result.outcome == CartOutcome.NO_OP:
            return None
        if result.outcome == CartOutcome.COMMITTED:
            return get_message(_SUCCESS_KEYS[result.operation], self.language)
        if result.outcome == CartOutcome.STOCK_EXCEEDED:
            return get_message("stock_exceeded", self.language)
        return get_message(_FAILURE_KEYS[result.operation], self.language)

    def notify(self, result: CartResult) -> None:
        message = self.message_for(result)
        if message is None:
            return
        # Fire-and-forget: a broken sink must not affect the cart
        try:
            if result.outcome == CartOutcome.COMMITTED:
                self.sink.notify_success(message)
            else:
                self.sink.notify_error(message)
        except Exception as e:
            logger.warning(f"Notification sink failed for {result.operation.value}: {e}")
