"""Resolution results that are either ready now or arrive later.

Resolving an asset should not cost a trip through the event loop when
every byte it needs is already at hand. A resolve call therefore
returns a ReadyResolution when it finished inside the call, and a
PendingResolution wrapping an asyncio task otherwise. Callers tell the
two apart by type (or by `done`), never by polling.

Both shapes can be awaited and both accept listeners, so code that
does not care about the distinction can treat them uniformly.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Coroutine, Generator
from typing import Any, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

ValueListener = Callable[[T], None]
ErrorListener = Callable[[BaseException], None]


def _mark_retrieved(task: "asyncio.Task[Any]") -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug("Pending resolution failed: %s", error)


class Resolution(ABC, Generic[T]):
    """Outcome of a resolve call."""

    @property
    @abstractmethod
    def done(self) -> bool:
        """Whether the value (or error) is already available."""

    @abstractmethod
    def result(self) -> T:
        """Return the value.

        Raises:
            asyncio.InvalidStateError: If the resolution is still pending
            Exception: The terminal error if the resolution failed
        """

    @abstractmethod
    def add_listener(
        self, on_value: ValueListener[T], on_error: ErrorListener | None = None
    ) -> None:
        """Register callbacks for the outcome.

        Exactly one of the two callbacks is called, exactly once.
        """

    @abstractmethod
    def __await__(self) -> Generator[Any, None, T]:
        ...


class ReadyResolution(Resolution[T]):
    """A resolution whose value was computed inside the resolve call.

    Listeners are called synchronously, before add_listener returns.
    """

    def __init__(self, value: T):
        self._value = value

    @property
    def done(self) -> bool:
        return True

    def result(self) -> T:
        return self._value

    def add_listener(
        self, on_value: ValueListener[T], on_error: ErrorListener | None = None
    ) -> None:
        on_value(self._value)

    def __await__(self) -> Generator[Any, None, T]:
        return self._value
        yield  # makes this a generator without ever suspending

    def __repr__(self) -> str:
        return f"ReadyResolution({self._value!r})"


class PendingResolution(Resolution[T]):
    """A resolution that completes later on the running event loop.

    The work is scheduled as an asyncio task as soon as the resolution is
    created. Its value is delivered exactly once: to every listener and
    to every awaiter.

    Raises:
        RuntimeError: If created while no event loop is running
    """

    def __init__(self, work: Coroutine[Any, Any, T]):
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            work.close()
            raise RuntimeError(
                "Asset store answered asynchronously but no event loop is running"
            ) from None
        self._task: asyncio.Task[T] = loop.create_task(work)
        # A superseded request may finish with nobody listening
        self._task.add_done_callback(_mark_retrieved)

    @property
    def done(self) -> bool:
        return self._task.done()

    def result(self) -> T:
        return self._task.result()

    def add_listener(
        self, on_value: ValueListener[T], on_error: ErrorListener | None = None
    ) -> None:
        def _notify(task: "asyncio.Task[T]") -> None:
            if task.cancelled():
                if on_error is not None:
                    on_error(asyncio.CancelledError())
                return
            error = task.exception()
            if error is None:
                on_value(task.result())
            elif on_error is not None:
                on_error(error)

        self._task.add_done_callback(_notify)

    def __await__(self) -> Generator[Any, None, T]:
        return self._task.__await__()

    def __repr__(self) -> str:
        state = "done" if self._task.done() else "pending"
        return f"PendingResolution({state})"
