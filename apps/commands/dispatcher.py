"""
Intent dispatcher.

Maps a command tag (``"create-week"``, ``"update-payment"``, ...) to a
validator and a handler. The dispatcher knows nothing about HTTP or Django;
the view layer registers handlers and turns results into responses.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional


class CommandError(Exception):
    """Base exception for dispatcher errors."""
    pass


class UnknownIntentError(CommandError):
    """Raised when no handler is registered for the intent."""

    def __init__(self, intent):
        super().__init__('Invalid intent')
        self.intent = intent


@dataclass(frozen=True)
class Command:
    intent: str
    validate: Optional[Callable[[Mapping], Any]]
    handle: Callable[[Any], Any]


class CommandDispatcher:
    def __init__(self):
        self._commands: Dict[str, Command] = {}

    @property
    def intents(self):
        return sorted(self._commands)

    def register(self, intent: str, validate=None):
        """
        Decorator registering a handler for an intent.

        ``validate`` receives the raw payload and returns what the handler
        is called with; without it the handler gets the payload itself.

        Example:
            >>> dispatcher = CommandDispatcher()
            >>> @dispatcher.register('ping')
            ... def ping(payload):
            ...     return 'pong'
            >>> dispatcher.dispatch({'intent': 'ping'})
            'pong'
        """
        def decorator(handler):
            if intent in self._commands:
                raise ValueError(f"Intent '{intent}' is already registered")
            self._commands[intent] = Command(intent=intent, validate=validate, handle=handler)
            return handler
        return decorator

    def dispatch(self, payload: Mapping):
        """
        Run the handler for ``payload['intent']``.

        Raises:
            UnknownIntentError: If the intent is missing or unregistered
        """
        intent = payload.get('intent')
        command = self._commands.get(intent)
        if command is None:
            raise UnknownIntentError(intent)

        data = command.validate(payload) if command.validate else payload
        return command.handle(data)
