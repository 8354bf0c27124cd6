"""Line echo server whose sessions also send periodic heartbeats."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import socket
import sys
from collections.abc import Sequence

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 6969
LINE_PREFIX = b"<line>"
HEARTBEAT = b"<heartbeat>\n"


class LineEchoSession:
    """One client connection served by two actors sharing a write lock.

    One actor echoes every received line behind a ``<line>`` header, the other
    writes a heartbeat at a fixed interval. The lock keeps their writes apart.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        heartbeat_interval: float = 1.0,
        max_line_length: int = 1024,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self.heartbeat_interval = heartbeat_interval
        self.max_line_length = max_line_length
        self._buffer = bytearray()
        self._write_lock = asyncio.Lock()
        self._tasks: tuple[asyncio.Task[None], ...] = ()
        sock = writer.get_extra_info("socket")
        if sock is not None and sock.family in (socket.AF_INET, socket.AF_INET6):
            with contextlib.suppress(OSError):
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

    def start(self) -> tuple[asyncio.Task[None], ...]:
        """Launch both actors and return their tasks."""
        if self._tasks:
            raise RuntimeError("session already started")
        self._tasks = (
            asyncio.create_task(self.handle_messages()),
            asyncio.create_task(self.send_heartbeats()),
        )
        return self._tasks

    def stop(self) -> None:
        """Close the connection and cancel the other actors."""
        self._writer.close()
        current = asyncio.current_task()
        for task in self._tasks:
            if task is not current:
                task.cancel()

    async def _read_line(self) -> bytes:
        while True:
            end = self._buffer.find(b"\n")
            if end >= 0:
                line = bytes(self._buffer[: end + 1])
                del self._buffer[: end + 1]
                return line
            room = self.max_line_length - len(self._buffer)
            if room <= 0:
                raise ValueError("line exceeds maximum length")
            chunk = await self._reader.read(room)
            if not chunk:
                raise EOFError("connection closed by peer")
            self._buffer += chunk

    async def handle_messages(self) -> None:
        """Echo each received line behind a ``<line>`` header until an error."""
        try:
            while True:
                line = await self._read_line()
                async with self._write_lock:
                    self._writer.write(LINE_PREFIX)
                    await self._writer.drain()
                    self._writer.write(line)
                    await self._writer.drain()
        except Exception:
            self.stop()

    async def send_heartbeats(self) -> None:
        """Write a heartbeat after every interval until an error."""
        try:
            while True:
                await asyncio.sleep(self.heartbeat_interval)
                async with self._write_lock:
                    self._writer.write(HEARTBEAT)
                    await self._writer.drain()
        except Exception:
            self.stop()


async def serve(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> asyncio.Server:
    """Start listening; each accepted connection gets its own session."""

    async def on_connect(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        session = LineEchoSession(reader, writer)
        await asyncio.gather(*session.start(), return_exceptions=True)

    return await asyncio.start_server(on_connect, host, port)


async def _run(host: str, port: str) -> None:
    server = await serve(host, int(port))
    async with server:
        await server.serve_forever()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the line echo server; an address and a port may be given together."""
    parser = argparse.ArgumentParser(description="Line echo server with heartbeats.")
    parser.add_argument("address", nargs="?")
    parser.add_argument("port", nargs="?")
    args = parser.parse_args(argv)
    host, port = DEFAULT_HOST, str(DEFAULT_PORT)
    if args.address is not None and args.port is not None:
        host, port = args.address, args.port
    try:
        asyncio.run(_run(host, port))
    except KeyboardInterrupt:
        return 0
    except Exception as exc:
        print(f"Exception: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())