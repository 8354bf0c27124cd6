"""Coroutine experiments: a Fibonacci generator, hand-driven tasks, thread hand-off, sleep sort, cancellation and two asyncio TCP echo servers."""

__version__ = "0.1.0"

__all__ = [
    "generator",
    "task",
    "thread_switching",
    "sleep_sort",
    "cancellation",
    "echo_server",
    "line_echo",
]