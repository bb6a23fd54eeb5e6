"""User notification sinks."""
from rocketcart.logging import get_logger


class LoggingNotificationSink:
    """Writes user notifications to the log: successes at INFO, errors at WARNING."""

    def __init__(self, name: str = "rocketcart.notifications"):
        self._logger = get_logger(name)

    def notify_success(self, message: str) -> None:
        self._logger.info(message)

    def notify_error(self, message: str) -> None:
        self._logger.warning(message)
