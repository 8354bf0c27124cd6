"""Racing a repeating task against a timeout and observing cancellation."""

from __future__ import annotations

import argparse
import asyncio
import enum
from collections.abc import Callable, Coroutine, Sequence
from typing import Any


class CancellationType(enum.IntFlag):
    """Kinds of cancellation that may be requested of an operation."""

    NONE = 0
    TERMINAL = 1
    PARTIAL = 2
    TOTAL = 4


def describe_cancellation_state(state: int, context: str) -> str:
    """Describe a cancellation state in one line prefixed by ``context``."""
    kind = CancellationType(state)
    text = f"[{context}] Cancellation state: "
    if kind == CancellationType.NONE:
        return text + "NONE (0)"
    text += "ACTIVE - "
    if kind == CancellationType.TERMINAL:
        text += "TERMINAL "
    if kind == CancellationType.PARTIAL:
        text += "PARTIAL "
    return text + f"(raw: {int(kind)})"


def _current_state() -> CancellationType:
    task = asyncio.current_task()
    if task is not None and task.cancelling():
        return CancellationType.TERMINAL
    return CancellationType.NONE


async def cancellable_task(
    interval: float = 1.0, log: Callable[[str], object] = print
) -> None:
    """Tick every ``interval`` seconds, reporting cancellation state, until cancelled."""
    iteration = 0
    try:
        while True:
            log(describe_cancellation_state(_current_state(), f"Iteration {iteration}"))
            if _current_state() != CancellationType.NONE:
                log("Cancellation detected! Exiting...")
                return
            await asyncio.sleep(interval)
            iteration += 1
    except asyncio.CancelledError:
        log("Timer cancelled! Task stopping...")
        raise


async def cancel_after_timeout(
    delay: float = 3.5, log: Callable[[str], object] = print
) -> None:
    """Wait ``delay`` seconds, then report that the timeout was reached."""
    log("Starting timeout timer...")
    await asyncio.sleep(delay)
    log("Timeout reached! Cancelling task...")


async def _first_success(*coros: Coroutine[Any, Any, Any]) -> int:
    """Run coroutines together; return the index of the first to succeed.

    The others are cancelled. If none succeeds, the first failure is raised.
    """
    tasks = [asyncio.create_task(coro) for coro in coros]
    failures: list[BaseException] = []
    pending = set(tasks)
    try:
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
            winners = [
                index
                for index, task in enumerate(tasks)
                if task in done and not task.cancelled() and task.exception() is None
            ]
            if winners:
                return winners[0]
            for task in tasks:
                if task in done:
                    failures.append(
                        asyncio.CancelledError() if task.cancelled() else task.exception()
                    )
        raise failures[0]
    finally:
        leftovers = [task for task in tasks if not task.done()]
        for task in leftovers:
            task.cancel()
        if leftovers:
            await asyncio.wait(leftovers)


async def main_coroutine(
    task_interval: float = 1.0,
    timeout: float = 3.5,
    log: Callable[[str], object] = print,
) -> int:
    """Race the ticking task against the timeout; return the winner's index."""
    winner = await _first_success(
        cancellable_task(task_interval, log),
        cancel_after_timeout(timeout, log),
    )
    if winner == 1:
        log("timeout reached, task cancelled")
    else:
        log("task completed successfully")
    return winner


def main(argv: Sequence[str] | None = None) -> int:
    """Run the race between the ticking task and the timeout."""
    parser = argparse.ArgumentParser(description="Cancel a ticking task after a timeout.")
    parser.add_argument("--interval", type=float, default=1.0, help="seconds between ticks")
    parser.add_argument("--timeout", type=float, default=3.5, help="seconds until cancel")
    args = parser.parse_args(argv)
    asyncio.run(main_coroutine(args.interval, args.timeout))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())