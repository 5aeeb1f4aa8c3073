"""Unit tests for the debouncer."""

import threading
import time

from iedrename.debounce import DEFAULT_DEBOUNCE_SECONDS, Debouncer


class TestDebouncer:
    """Tests for Debouncer."""

    def test_default_delay(self):
        debouncer = Debouncer(lambda: None)

        assert debouncer.delay == DEFAULT_DEBOUNCE_SECONDS == 0.1

    def test_only_latest_call_runs(self):
        """Test that rapid calls collapse into one call with the latest arguments."""
        calls = []
        done = threading.Event()

        def callback(value):
            calls.append(value)
            done.set()

        debouncer = Debouncer(callback, delay=0.05)
        debouncer("a")
        debouncer("ab")
        debouncer("abc")

        assert done.wait(timeout=2)
        time.sleep(0.1)
        assert calls == ["abc"]
        assert not debouncer.pending

    def test_call_is_delayed(self):
        calls = []
        debouncer = Debouncer(calls.append, delay=0.5)

        debouncer("x")

        assert calls == []
        assert debouncer.pending
        debouncer.cancel()

    def test_separate_bursts_each_run(self):
        calls = []
        done = threading.Event()

        def callback(value):
            calls.append(value)
            if len(calls) == 2:
                done.set()

        debouncer = Debouncer(callback, delay=0.02)
        debouncer("first")
        time.sleep(0.2)
        debouncer("second")

        assert done.wait(timeout=2)
        assert calls == ["first", "second"]

    def test_flush_runs_pending_call_immediately(self):
        calls = []
        debouncer = Debouncer(calls.append, delay=0.5)

        debouncer("x")
        debouncer.flush()

        assert calls == ["x"]
        assert not debouncer.pending

    def test_flush_without_pending_call_does_nothing(self):
        calls = []
        debouncer = Debouncer(calls.append, delay=0.5)

        debouncer.flush()

        assert calls == []

    def test_cancel_drops_pending_call(self):
        calls = []
        debouncer = Debouncer(calls.append, delay=0.05)

        debouncer("x")
        debouncer.cancel()
        time.sleep(0.15)

        assert calls == []
        assert not debouncer.pending

    def test_keyword_arguments_are_passed(self):
        received = {}
        debouncer = Debouncer(lambda **kwargs: received.update(kwargs), delay=0.5)

        debouncer(text="abc")
        debouncer.flush()

        assert received == {"text": "abc"}
