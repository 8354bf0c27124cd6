"""Lazy Fibonacci sequence produced by a generator."""

from __future__ import annotations

import sys
from collections.abc import Iterator, Sequence

_DEFAULT_COUNT = 10


def fibonacci(count: int) -> Iterator[int]:
    """Yield the first ``count`` Fibonacci numbers, starting from 0."""
    a, b = 0, 1
    for _ in range(count):
        yield a
        a, b = b, a + b


def main(argv: Sequence[str] | None = None) -> int:
    """Print the first Fibonacci numbers, each followed by a space."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1:
        raise SystemExit("usage: generator [count]")
    try:
        count = int(args[0]) if args else _DEFAULT_COUNT
    except ValueError:
        raise SystemExit(f"invalid count: {args[0]!r}") from None
    print("".join(f"{value} " for value in fibonacci(count)), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())