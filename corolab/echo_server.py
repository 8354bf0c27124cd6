"""TCP echo server that drops connections idle for too long."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import time
from collections.abc import Sequence
from dataclasses import dataclass

READ_CHUNK = 4196
DEFAULT_TIMEOUT = 10.0
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 54321


@dataclass
class Deadline:
    """A moment on the monotonic clock after which a connection is idle."""

    expires_at: float = 0.0

    def extend(self, seconds: float) -> None:
        """Move the deadline to ``seconds`` from now."""
        self.expires_at = time.monotonic() + seconds

    @property
    def expired(self) -> bool:
        """True once the deadline lies in the past."""
        return self.expires_at <= time.monotonic()


async def echo(
    reader: asyncio.StreamReader,
    writer: asyncio.StreamWriter,
    deadline: Deadline,
    timeout: float = DEFAULT_TIMEOUT,
) -> None:
    """Send back everything read, pushing the deadline forward before each read."""
    while True:
        deadline.extend(timeout)
        data = await reader.read(READ_CHUNK)
        if not data:
            raise EOFError("connection closed by peer")
        writer.write(data)
        await writer.drain()


async def watchdog(deadline: Deadline) -> None:
    """Wait until the deadline passes, following any extension; then raise TimeoutError."""
    now = time.monotonic()
    while deadline.expires_at > now:
        await asyncio.sleep(deadline.expires_at - now)
        now = time.monotonic()
    raise TimeoutError("connection timed out")


async def handle_connection(
    reader: asyncio.StreamReader,
    writer: asyncio.StreamWriter,
    timeout: float = DEFAULT_TIMEOUT,
) -> None:
    """Echo on the connection until it fails or stays idle past ``timeout``.

    The first error raised by either the echo loop or the watchdog is re-raised
    after the other one has been cancelled; the connection is closed in any case.
    """
    deadline = Deadline()
    try:
        async with asyncio.TaskGroup() as group:
            group.create_task(echo(reader, writer, deadline, timeout))
            group.create_task(watchdog(deadline))
    except ExceptionGroup as failures:
        raise failures.exceptions[0] from None
    finally:
        writer.close()
        with contextlib.suppress(Exception):
            await writer.wait_closed()


async def serve(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    timeout: float = DEFAULT_TIMEOUT,
) -> asyncio.Server:
    """Start listening; every connection is handled on its own and its errors dropped."""

    async def on_connect(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        with contextlib.suppress(Exception):
            await handle_connection(reader, writer, timeout)

    return await asyncio.start_server(on_connect, host, port)


async def _run(host: str, port: int, timeout: float) -> None:
    server = await serve(host, port, timeout)
    async with server:
        await server.serve_forever()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the echo server until interrupted."""
    parser = argparse.ArgumentParser(description="Echo server with an idle timeout.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    args = parser.parse_args(argv)
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_run(args.host, args.port, args.timeout))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())