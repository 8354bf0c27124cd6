"""A coroutine wrapper that starts suspended and is resumed by hand."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Coroutine, Generator, Sequence
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class _Suspend:
    """Awaitable that always suspends the awaiting coroutine once."""

    def __await__(self) -> Generator[None, None, None]:
        yield


class Task(Generic[T]):
    """Lazily started coroutine whose caller drives it step by step."""

    def __init__(self, coro: Coroutine[Any, Any, T]) -> None:
        self._coro = coro
        self._finished = False
        self._closed = False
        self._value: T | None = None
        self._error: BaseException | None = None

    @property
    def done(self) -> bool:
        """True once the coroutine has returned or raised."""
        return self._finished

    @property
    def value(self) -> T:
        """The value the coroutine returned."""
        if self._error is not None:
            raise RuntimeError("task failed") from self._error
        if not self._finished:
            raise RuntimeError("task has not finished")
        return self._value  # type: ignore[return-value]

    def resume(self) -> None:
        """Run the coroutine until its next suspension point or its end."""
        if self._closed:
            raise RuntimeError("task has been closed")
        if self._finished:
            raise RuntimeError("task has already finished")
        try:
            self._coro.send(None)
        except StopIteration as stop:
            self._finished = True
            self._value = stop.value
        except BaseException as exc:
            self._finished = True
            self._error = exc
            raise

    def close(self) -> None:
        """Destroy the coroutine; the task cannot be resumed afterwards."""
        if not self._closed:
            self._closed = True
            self._coro.close()

    def __enter__(self) -> Task[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


async def example_task(log: Callable[[str], object] = print) -> int:
    """Report progress, suspend once, then finish with 42."""
    log("Running example_task...")
    await _Suspend()
    log("example_task completed.")
    return 42


def _say(message: str) -> None:
    print(message, end="\n\n")


def main(argv: Sequence[str] | None = None) -> int:
    """Drive the example task to completion and report its value."""
    argparse.ArgumentParser(description="Drive a hand-resumed task.").parse_args(argv)
    with Task(example_task(_say)) as task:
        _say("Task created, now resuming...")
        task.resume()
        while not task.done:
            _say("Task is still running.")
            task.resume()
        _say(f"Task finished with value: {task.value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())