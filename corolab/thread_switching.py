"""A coroutine that suspends on one thread and resumes on another."""

from __future__ import annotations

import argparse
import threading
from collections.abc import Callable, Coroutine, Generator, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass
class ThreadSlot:
    """Holds at most one thread that still has to be joined."""

    thread: threading.Thread | None = None

    @property
    def joinable(self) -> bool:
        """True while the slot holds a thread that has not been joined."""
        return self.thread is not None

    def join(self) -> None:
        """Wait for the held thread and empty the slot."""
        if self.thread is None:
            raise RuntimeError("no thread to join")
        self.thread.join()
        self.thread = None


class SwitchToNewThread:
    """Awaitable that moves the rest of the coroutine onto a new thread."""

    def __init__(self, slot: ThreadSlot, log: Callable[[str], object] = print) -> None:
        self.slot = slot
        self._log = log

    def __await__(self) -> Generator[SwitchToNewThread, None, None]:
        yield self

    def suspend(self, resume: Callable[[], None]) -> None:
        """Start a thread in the slot that calls ``resume``."""
        if self.slot.joinable:
            raise RuntimeError("Output thread parameter not empty")
        thread = threading.Thread(target=resume)
        self.slot.thread = thread
        thread.start()
        self._log(f"New thread ID: {thread.ident}")


def switch_to_new_thread(slot: ThreadSlot) -> SwitchToNewThread:
    """Return an awaitable that resumes the awaiting coroutine on a new thread."""
    return SwitchToNewThread(slot)


async def resuming_on_new_thread(
    slot: ThreadSlot, log: Callable[[str], object] = print
) -> None:
    """Report the current thread before and after switching threads."""
    log(f"Coroutine started on thread: {threading.get_ident()}")
    await switch_to_new_thread(slot)
    log(f"Coroutine resumed on thread: {threading.get_ident()}")


def run_detached(coro: Coroutine[Any, Any, Any]) -> None:
    """Start a coroutine at once; its result and any exception are discarded."""
    _advance(coro)


def _advance(coro: Coroutine[Any, Any, Any]) -> None:
    error: BaseException | None = None
    while True:
        try:
            request = coro.send(None) if error is None else coro.throw(error)
        except StopIteration:
            return
        except Exception:
            return
        if not isinstance(request, SwitchToNewThread):
            error = TypeError(f"cannot await {request!r} in a detached coroutine")
            continue
        try:
            request.suspend(lambda: _advance(coro))
        except Exception as exc:
            error = exc
            continue
        return


def main(argv: Sequence[str] | None = None) -> int:
    """Run the thread-switching coroutine and join the thread it created."""
    argparse.ArgumentParser(description="Resume a coroutine on a new thread.").parse_args(argv)
    slot = ThreadSlot()
    run_detached(resuming_on_new_thread(slot))
    if slot.joinable:
        slot.join()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())