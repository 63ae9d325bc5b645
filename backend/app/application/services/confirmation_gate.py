"""Single reusable confirm/cancel prompt.

At most one prompt is open at a time. Opening a new prompt replaces the
current one, so the last requester wins. Each prompt carries a token so a
callback that finishes late only closes the prompt it belongs to.
"""

import inspect
import itertools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from app.domain.exceptions import ConfirmationStateError, NoPendingConfirmationError

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[], Any | Awaitable[Any]]


@dataclass
class _Prompt:
    token: int
    message: str
    on_confirm: ConfirmCallback
    running: bool = False


class ConfirmationGate:
    """Holds the open prompt and runs its callback on confirmation."""

    def __init__(self) -> None:
        self._prompt: _Prompt | None = None
        self._tokens = itertools.count(1)

    @property
    def is_open(self) -> bool:
        return self._prompt is not None

    @property
    def is_running(self) -> bool:
        return self._prompt is not None and self._prompt.running

    @property
    def message(self) -> str | None:
        return self._prompt.message if self._prompt else None

    @property
    def token(self) -> int | None:
        return self._prompt.token if self._prompt else None

    def open(self, message: str, on_confirm: ConfirmCallback) -> int:
        """Show a prompt. Returns its token."""
        if self._prompt is not None:
            logger.debug("Replacing open prompt #%d", self._prompt.token)
        self._prompt = _Prompt(token=next(self._tokens), message=message, on_confirm=on_confirm)
        return self._prompt.token

    async def confirm(self) -> Any:
        """Run the open prompt's callback.

        The prompt closes only when the callback succeeds. A failing
        callback leaves it open so the user can retry or cancel.
        """
        prompt = self._prompt
        if prompt is None:
            raise NoPendingConfirmationError()
        if prompt.running:
            raise ConfirmationStateError()

        prompt.running = True
        try:
            result = prompt.on_confirm()
            if inspect.isawaitable(result):
                result = await result
        finally:
            prompt.running = False

        self.close(prompt.token)
        return result

    def cancel(self) -> None:
        """Close the open prompt without running it. No-op when nothing is open."""
        if self._prompt is not None:
            logger.debug("Prompt #%d cancelled", self._prompt.token)
        self._prompt = None

    def close(self, token: int) -> None:
        """Close the prompt with ``token`` if it is still the open one."""
        if self._prompt is not None and self._prompt.token == token:
            self._prompt = None
