from __future__ import annotations

import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from eatin.application.use_cases.locks import KeyedLocks


def test_hold_serializes_same_key() -> None:
    locks = KeyedLocks()
    guard = threading.Lock()
    active = 0
    max_active = 0

    def work(_: int) -> None:
        nonlocal active, max_active
        with locks.hold("tbl_001"):
            with guard:
                active += 1
                max_active = max(max_active, active)
            time.sleep(0.005)
            with guard:
                active -= 1

    with ThreadPoolExecutor(max_workers=4) as executor:
        list(executor.map(work, range(8)))

    assert max_active == 1


def test_hold_does_not_block_other_keys() -> None:
    locks = KeyedLocks()
    # both threads must be inside their lock at once to pass the barrier
    barrier = threading.Barrier(2, timeout=2)

    def work(key: str) -> bool:
        with locks.hold(key):
            barrier.wait()
        return True

    with ThreadPoolExecutor(max_workers=2) as executor:
        results = list(executor.map(work, ["tbl_001", "tbl_002"]))

    assert results == [True, True]


def test_hold_releases_on_error() -> None:
    locks = KeyedLocks()

    try:
        with locks.hold("tbl_001"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    with locks.hold("tbl_001"):
        pass


def test_released_keys_leave_no_entry() -> None:
    locks = KeyedLocks()

    for index in range(100):
        with locks.hold(f"tbl_{index:03d}"):
            assert locks.is_held(f"tbl_{index:03d}")

    assert len(locks) == 0
    assert locks.is_held("tbl_000") is False


def test_entry_survives_while_another_holder_waits() -> None:
    locks = KeyedLocks()
    entered = threading.Event()
    release = threading.Event()

    def first() -> None:
        with locks.hold("tbl_001"):
            entered.set()
            release.wait(timeout=2)

    def second() -> None:
        with locks.hold("tbl_001"):
            pass

    with ThreadPoolExecutor(max_workers=2) as executor:
        first_done = executor.submit(first)
        entered.wait(timeout=2)
        second_done = executor.submit(second)
        time.sleep(0.01)
        assert len(locks) == 1
        release.set()
        first_done.result()
        second_done.result()

    assert len(locks) == 0
