# corolab

A handful of small, self-contained coroutine experiments built on Python
generators, threads and `asyncio`. Each one is importable as a module and can
also be run as a command. The package has no dependencies beyond the standard
library.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

### `corolab.generator` — `corolab-generator [count]`

`fibonacci(count)` is a generator yielding the first `count` Fibonacci numbers,
starting from 0. The command prints them on one line, each followed by a space
(ten by default: `0 1 1 2 3 5 8 13 21 34 `).

### `corolab.task` — `corolab-task`

`Task` wraps a coroutine that does not start on its own. Each call to
`Task.resume()` runs it to its next suspension point; `Task.done` tells whether
it has finished and `Task.value` holds what it returned. Resuming a finished or
closed task raises `RuntimeError`. A `Task` is a context manager that closes
the coroutine on exit. `example_task(log)` logs a message, suspends once, logs
again and returns `42`; the command steps it to completion and prints its value.

### `corolab.thread_switching` — `corolab-thread-switching`

`switch_to_new_thread(slot)` returns a `SwitchToNewThread` awaitable: awaiting
it hands the rest of the coroutine to a new thread, which is stored in the
given `ThreadSlot`. Using a slot that still holds a thread that has not been
joined raises `RuntimeError("Output thread parameter not empty")`.
`run_detached(coro)` starts such a coroutine and drops its result and errors.
`resuming_on_new_thread(slot, log)` reports the thread id before and after the
switch; the command runs it and joins the thread afterwards.

### `corolab.sleep_sort` — `corolab-sleep-sort [numbers ...] [--unit SECONDS]`

`sleep_sort(numbers, unit=1.0, emit=None)` starts one timer per number, waiting
`number * unit` seconds, and passes each number to `emit` (printing `n, ` by
default) when its timer fires. It returns the numbers in the order they were
emitted. The command sorts `10 5 6 3 4 1` unless numbers are given.

### `corolab.cancellation` — `corolab-cancellation [--interval S] [--timeout S]`

`cancellable_task(interval, log)` ticks every `interval` seconds, logging its
cancellation state each time; `cancel_after_timeout(delay, log)` waits `delay`
seconds. `main_coroutine(task_interval, timeout, log)` races the two: the first
to finish successfully wins, the other is cancelled, and the winner's index is
returned (`1` means the timeout won). `describe_cancellation_state(state, context)`
renders a `CancellationType` value as a single line. Defaults are a 1 second
interval and a 3.5 second timeout.

### `corolab.echo_server` — `corolab-echo-server [--host H] [--port P] [--timeout S]`

A TCP echo server (default `0.0.0.0:54321`). `handle_connection` runs `echo`,
which sends back whatever is read and pushes a `Deadline` forward before every
read, next to `watchdog`, which raises `TimeoutError` once the deadline has
passed. A connection is closed when it stays idle for `--timeout` seconds
(10 by default), when the peer closes it, or on any error. `serve(host, port,
timeout)` returns the listening `asyncio.Server`.

### `corolab.line_echo` — `corolab-line-echo [address port]`

A line-based TCP server (default `127.0.0.1:6969`; address and port are only
used when both are given). Each connection gets a `LineEchoSession`, which runs
two actors: `handle_messages` answers every received line with `<line>`
followed by the line, and `send_heartbeats` writes `<heartbeat>\n` once a
second. A lock keeps their writes from interleaving. A line longer than
1024 bytes, the peer closing, or any write error stops the session.
`serve(host, port)` returns the listening `asyncio.Server`.

## Examples

```
corolab-generator
corolab-sleep-sort 3 1 2 --unit 0.1
corolab-cancellation
corolab-echo-server
corolab-line-echo 127.0.0.1 6969
```

Using the library directly:

```python
from corolab.generator import fibonacci

print(list(fibonacci(10)))  # [0, 1, 1, 2, 3, 5, 8, 13, 21, 34]
```

```python
import asyncio
from corolab.sleep_sort import sleep_sort

out = []
order = asyncio.run(sleep_sort([3, 1, 2], 0.01, out.append))
print(out, order)  # [1, 2, 3] [1, 2, 3]
```

## What it does not do

The two servers speak raw TCP only: `corolab.echo_server` echoes bytes and
does not understand HTTP, and neither server offers TLS, authentication or
configuration files. They are demonstrations, not production services.