"""
Status bar message with a single auto-clear timer.

Showing a message cancels the clear still pending from the previous one, so
at most one timer is alive and the latest message always wins.
"""

from typing import Callable, Optional, Protocol

from coordgraph.constants import STATUS_TIMEOUT


class Cancellable(Protocol):
    def cancel(self) -> None:
        ...


# (delay_seconds, callback) -> handle; ui.timer(delay, cb, once=True) fits
Scheduler = Callable[[float, Callable[[], None]], Cancellable]


class StatusMessage:
    def __init__(self,
                 on_change: Callable[[str], None],
                 schedule: Scheduler,
                 timeout: float = STATUS_TIMEOUT):
        self._on_change = on_change
        self._schedule = schedule
        self._timeout = timeout
        self._timer: Optional[Cancellable] = None
        self.text = ""

    @property
    def has_pending_clear(self) -> bool:
        return self._timer is not None

    def show(self, text: Optional[str]) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self.text = text or ""
        self._on_change(self.text)
        if self.text:
            self._timer = self._schedule(self._timeout, self._expire)

    def clear(self) -> None:
        self.show("")

    def _expire(self) -> None:
        self._timer = None
        self.text = ""
        self._on_change("")
