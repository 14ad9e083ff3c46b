"""Ready-or-pending handoff between an index build and its viewer."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from .logging import get_logger
from .models import ImplementorIndex

Handler = Callable[[ImplementorIndex], None]


class RegistrationError(RuntimeError):
    """Raised when a registry is used outside its two-step protocol."""


class RegistryState(str, Enum):
    UNINITIALIZED = "uninitialized"
    PENDING = "pending"
    READY = "ready"


class ImplementorRegistry:
    """Delivers a built index to the viewer handler, stashing it until one attaches.

    The builder calls :meth:`submit` once per build and the viewer calls
    :meth:`attach` once at startup; whichever comes second triggers delivery.
    """

    def __init__(self) -> None:
        self._state = RegistryState.UNINITIALIZED
        self._handler: Optional[Handler] = None
        self._pending: Optional[ImplementorIndex] = None
        self.logger = get_logger("registry")

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def pending(self) -> Optional[ImplementorIndex]:
        return self._pending

    def submit(self, index: ImplementorIndex) -> None:
        """Hand the index to the attached handler, or stash it for later."""
        if self._state is RegistryState.READY:
            handler = self._handler
            if handler is None:
                raise RegistrationError("Registry is ready but has no handler attached")
            self.logger.debug("Delivering index with %d key(s) to handler", len(index))
            handler(index)
            return
        if self._state is RegistryState.PENDING:
            raise RegistrationError("An index is already pending registration for this build")
        self.logger.debug("Viewer not ready; stashing index with %d key(s)", len(index))
        self._pending = index
        self._state = RegistryState.PENDING

    def attach(self, handler: Handler) -> None:
        """Install the viewer handler and flush any stashed index to it.

        A handler that raises while receiving the stashed index is not
        installed; the index stays pending for the next attach.
        """
        if self._state is RegistryState.READY:
            raise RegistrationError("A handler is already attached to this registry")
        pending = self._pending
        if pending is not None:
            self.logger.debug("Flushing pending index to newly attached handler")
            handler(pending)
        self._handler = handler
        self._pending = None
        self._state = RegistryState.READY


__all__ = ["ImplementorRegistry", "RegistrationError", "RegistryState"]
