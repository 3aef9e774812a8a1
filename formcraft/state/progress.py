"""Observable render progress and outcome."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RenderOutcome:
    succeeded: bool
    message: str


class RenderProgress:
    def __init__(self) -> None:
        self._fraction = 0.0
        self._busy = False
        self._outcome: RenderOutcome | None = None
        self._listeners: list[Callable[[RenderProgress], None]] = []

    @property
    def fraction(self) -> float:
        return self._fraction

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def outcome(self) -> RenderOutcome | None:
        return self._outcome

    def subscribe(self, listener: Callable[[RenderProgress], None]) -> Callable[[], None]:
        """Register ``listener``; the returned callable unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def begin(self) -> None:
        self._busy = True
        self._fraction = 0.0
        self._outcome = None
        self._notify()

    def advance(self, completed: int, total: int) -> None:
        if total <= 0:
            raise ValueError("total must be positive")
        self._fraction = min(1.0, max(0.0, completed / total))
        self._notify()

    def succeed(self, message: str) -> None:
        self._outcome = RenderOutcome(succeeded=True, message=message)
        self._notify()

    def fail(self, message: str) -> None:
        self._outcome = RenderOutcome(succeeded=False, message=message)
        self._notify()

    def reset(self) -> None:
        self._busy = False
        self._fraction = 0.0
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
