import asyncio

import pytest

from corolab.cancellation import (
    CancellationType,
    cancel_after_timeout,
    cancellable_task,
    describe_cancellation_state,
    main,
    main_coroutine,
)


def test_describe_none():
    assert (
        describe_cancellation_state(CancellationType.NONE, "ctx")
        == "[ctx] Cancellation state: NONE (0)"
    )


def test_describe_terminal():
    text = describe_cancellation_state(CancellationType.TERMINAL, "x")
    assert text == "[x] Cancellation state: ACTIVE - TERMINAL (raw: 1)"


def test_describe_partial_accepts_plain_int():
    text = describe_cancellation_state(int(CancellationType.PARTIAL), "y")
    assert text.startswith("[y] Cancellation state: ACTIVE - PARTIAL ")
    assert text.endswith(f"(raw: {int(CancellationType.PARTIAL)})")


def test_describe_total_names_no_kind():
    text = describe_cancellation_state(CancellationType.TOTAL, "z")
    assert "TERMINAL" not in text
    assert "PARTIAL" not in text
    assert text.endswith(f"ACTIVE - (raw: {int(CancellationType.TOTAL)})")


@pytest.mark.asyncio
async def test_timeout_wins_race():
    log = []
    winner = await main_coroutine(task_interval=0.01, timeout=0.035, log=log.append)
    assert winner == 1
    assert log[-1] == "timeout reached, task cancelled"
    assert "Starting timeout timer..." in log
    assert "Timeout reached! Cancelling task..." in log
    assert "Timer cancelled! Task stopping..." in log
    assert "[Iteration 0] Cancellation state: NONE (0)" in log
    iterations = [line for line in log if line.startswith("[Iteration")]
    assert all(line.endswith("NONE (0)") for line in iterations)


@pytest.mark.asyncio
async def test_cancel_during_wait_is_reported():
    log = []
    task = asyncio.create_task(cancellable_task(10.0, log.append))
    await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert log[-1] == "Timer cancelled! Task stopping..."


@pytest.mark.asyncio
async def test_cancellation_detected_between_waits():
    log = []

    def recorder(message):
        log.append(message)
        if message.startswith("[Iteration 0]"):
            asyncio.current_task().cancel()

    task = asyncio.create_task(cancellable_task(10.0, recorder))
    with pytest.raises(asyncio.CancelledError):
        await task
    assert task.cancelled()
    assert log == [
        "[Iteration 0] Cancellation state: NONE (0)",
        "Cancellation detected! Exiting...",
    ]


@pytest.mark.asyncio
async def test_cancel_after_timeout_logs_start_and_end():
    log = []
    assert await cancel_after_timeout(0.0, log.append) is None
    assert log == ["Starting timeout timer...", "Timeout reached! Cancelling task..."]


def test_main_runs_race(capsys):
    assert main(["--interval", "0.01", "--timeout", "0.03"]) == 0
    out = capsys.readouterr().out
    assert "timeout reached, task cancelled" in out
    assert "Timer cancelled! Task stopping..." in out