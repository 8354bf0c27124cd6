import asyncio
import socket

import pytest

from corolab.line_echo import LineEchoSession, serve

HEARTBEAT = b"<heartbeat>\n"
HEADER = b"<line>"


async def _started(**options):
    left, right = socket.socketpair()
    server_r, server_w = await asyncio.open_connection(sock=left)
    client_r, client_w = await asyncio.open_connection(sock=right)
    session = LineEchoSession(server_r, server_w, **options)
    return session, session.start(), client_r, client_w


async def _settle(tasks):
    await asyncio.wait_for(asyncio.gather(*tasks, return_exceptions=True), 5.0)


async def _shutdown(session, tasks, client_w):
    session.stop()
    await _settle(tasks)
    client_w.close()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        (b"hi\n", [b"<line>hi\n"]),
        (b"a\nb\n", [b"<line>a\n", b"<line>b\n"]),
    ],
)
async def test_lines_are_echoed_with_header(payload, expected):
    session, tasks, client_r, client_w = await _started(heartbeat_interval=10.0)
    client_w.write(payload)
    await client_w.drain()
    received = [await asyncio.wait_for(client_r.readline(), 5.0) for _ in expected]
    assert received == expected
    await _shutdown(session, tasks, client_w)


@pytest.mark.asyncio
async def test_heartbeat_is_sent():
    session, tasks, client_r, client_w = await _started(heartbeat_interval=0.02)
    assert await asyncio.wait_for(client_r.readline(), 5.0) == HEARTBEAT
    await _shutdown(session, tasks, client_w)


@pytest.mark.asyncio
async def test_writes_never_interleave():
    session, tasks, client_r, client_w = await _started(heartbeat_interval=0.005)
    sent = [f"msg{n}\n".encode() for n in range(20)]
    for payload in sent:
        client_w.write(payload)
        await client_w.drain()
        await asyncio.sleep(0.002)
    echoed = []
    while len(echoed) < len(sent):
        line = await asyncio.wait_for(client_r.readline(), 5.0)
        if line != HEARTBEAT:
            assert line.startswith(HEADER)
            echoed.append(line[len(HEADER):])
    assert echoed == sent
    await _shutdown(session, tasks, client_w)


@pytest.mark.asyncio
async def test_overlong_line_ends_session():
    _session, tasks, client_r, client_w = await _started(
        heartbeat_interval=10.0, max_line_length=8
    )
    client_w.write(b"x" * 20)
    await client_w.drain()
    assert await asyncio.wait_for(client_r.read(), 5.0) == b""
    await _settle(tasks)
    assert all(task.done() for task in tasks)
    assert tasks[1].cancelled()
    client_w.close()


@pytest.mark.asyncio
async def test_client_close_ends_session():
    _session, tasks, _client_r, client_w = await _started(heartbeat_interval=10.0)
    client_w.close()
    await _settle(tasks)
    assert not tasks[0].cancelled()
    assert tasks[1].cancelled()


@pytest.mark.asyncio
async def test_stop_closes_connection():
    session, tasks, client_r, client_w = await _started(heartbeat_interval=10.0)
    session.stop()
    assert await asyncio.wait_for(client_r.read(), 5.0) == b""
    await _settle(tasks)
    assert all(task.cancelled() for task in tasks)
    client_w.close()


@pytest.mark.asyncio
async def test_start_twice_is_rejected():
    session, tasks, _client_r, client_w = await _started(heartbeat_interval=10.0)
    with pytest.raises(RuntimeError):
        session.start()
    await _shutdown(session, tasks, client_w)


@pytest.mark.asyncio
async def test_server_echoes_lines_over_tcp():
    server = await serve("127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    async with server:
        reader, writer = await asyncio.open_connection("127.0.0.1", port)
        writer.write(b"hello\n")
        await writer.drain()
        assert await asyncio.wait_for(reader.readline(), 5.0) == b"<line>hello\n"
        writer.close()