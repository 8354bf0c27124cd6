"""Sleep sort: every number waits in proportion to its value."""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Callable, Iterable, Sequence


def _print_number(number: int) -> None:
    print(f"{number}, ", end="", flush=True)


async def sleep_sort(
    numbers: Iterable[int],
    unit: float = 1.0,
    emit: Callable[[int], object] | None = None,
) -> list[int]:
    """Emit each number after ``number * unit`` seconds; return them in emitted order."""
    report = emit if emit is not None else _print_number
    order: list[int] = []

    async def sleeper(number: int) -> None:
        await asyncio.sleep(number * unit)
        report(number)
        order.append(number)

    async with asyncio.TaskGroup() as group:
        for number in numbers:
            group.create_task(sleeper(number))
    return order


def main(argv: Sequence[str] | None = None) -> int:
    """Sleep-sort the given numbers, printing them as they wake."""
    parser = argparse.ArgumentParser(description="Sort numbers by sleeping.")
    parser.add_argument("numbers", nargs="*", type=int, default=[10, 5, 6, 3, 4, 1])
    parser.add_argument("--unit", type=float, default=1.0, help="seconds per unit")
    args = parser.parse_args(argv)
    asyncio.run(sleep_sort(args.numbers, args.unit))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())