"""Tests for the callback event loop."""

import sys
import threading
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SampaSearch.services.loop import EventLoop


class TestEventLoop(unittest.TestCase):
    def test_callbacks_run_in_order(self) -> None:
        loop = EventLoop()
        seen = []
        for n in range(3):
            loop.post(seen.append, n)
        self.assertEqual(loop.run_pending(), 3)
        self.assertEqual(seen, [0, 1, 2])
        self.assertEqual(loop.run_pending(), 0)

    def test_failing_callback_does_not_stop_loop(self) -> None:
        loop = EventLoop()
        seen = []

        def boom() -> None:
            raise RuntimeError("boom")

        loop.post(boom)
        loop.post(seen.append, "after")
        self.assertEqual(loop.run_pending(), 2)
        self.assertEqual(seen, ["after"])

    def test_run_until_with_worker_thread(self) -> None:
        loop = EventLoop()
        seen = []
        worker = threading.Thread(target=lambda: [loop.post(seen.append, n) for n in range(5)])
        worker.start()
        self.assertTrue(loop.run_until(lambda: len(seen) == 5, timeout=2))
        worker.join()
        self.assertEqual(seen, [0, 1, 2, 3, 4])

    def test_run_until_times_out(self) -> None:
        self.assertFalse(EventLoop().run_until(lambda: False, timeout=0.05))

    def test_run_until_returns_immediately_when_satisfied(self) -> None:
        self.assertTrue(EventLoop().run_until(lambda: True))


if __name__ == "__main__":
    unittest.main()
