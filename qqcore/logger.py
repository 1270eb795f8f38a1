"""Pluggable logging used by the client."""

from __future__ import annotations

from typing import Any, Protocol


class Logger(Protocol):
    """Sink for client log messages; messages use %-style format strings."""

    def info(self, format: str, *args: Any) -> None: ...

    def warning(self, format: str, *args: Any) -> None: ...

    def error(self, format: str, *args: Any) -> None: ...

    def debug(self, format: str, *args: Any) -> None: ...

    def dump(self, dumped: bytes, format: str, *args: Any) -> None: ...


class ClientLog:
    """Forwards messages to a logger, dropping them while none is set."""

    def __init__(self, logger: Logger | None = None) -> None:
        self.logger = logger

    def set_logger(self, logger: Logger | None) -> None:
        self.logger = logger

    def info(self, msg: str, *args: Any) -> None:
        if self.logger is not None:
            self.logger.info(msg, *args)

    def warning(self, msg: str, *args: Any) -> None:
        if self.logger is not None:
            self.logger.warning(msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        if self.logger is not None:
            self.logger.error(msg, *args)

    def debug(self, msg: str, *args: Any) -> None:
        if self.logger is not None:
            self.logger.debug(msg, *args)

    def dump(self, msg: str, data: bytes, *args: Any) -> None:
        if self.logger is not None:
            self.logger.dump(data, msg, *args)