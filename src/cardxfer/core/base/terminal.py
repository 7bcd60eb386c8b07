from __future__ import annotations

import logging
from typing import Callable

from cardxfer.core.base.agent import Agent
from cardxfer.core.base.message import Message, Result

lg = logging.getLogger(__name__)


def handles(message_cls: type[Message]) -> Callable:
    """Decorator that registers a method as handler for a message type."""

    def decorator(method: Callable) -> Callable:
        method._handles_message = message_cls
        return method

    return decorator


class Terminal:
    """Card-side endpoint of a session.

    Each Message sent through send() becomes one exchange with the card and
    comes back as a Result. Handlers are registered per message type with
    @handles and inherited by subclasses. Used as a context manager, the
    terminal holds the card connection for the duration of the block.
    """

    _handlers: dict[type[Message], str]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._handlers = {}
        for base in reversed(cls.__mro__):
            if hasattr(base, "_handlers"):
                cls._handlers.update(base._handlers)
        for name in vars(cls):
            method = getattr(cls, name)
            if callable(method) and hasattr(method, "_handles_message"):
                cls._handlers[method._handles_message] = name

    def __init__(self, agent: Agent) -> None:
        self._agent = agent

    def __enter__(self) -> Terminal:
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.disconnect()

    def connect(self) -> None:
        self._agent.connect()

    def disconnect(self) -> None:
        self._agent.disconnect()
        lg.debug("card released")

    def send(self, message: Message) -> Result:
        """Dispatch a message to its handler.

        Raises ValueError for a message type no handler is registered for.
        """
        handler_name = self._handlers.get(type(message))
        if handler_name is None:
            raise ValueError(f"unsupported message: {message}")
        return getattr(self, handler_name)(message)
