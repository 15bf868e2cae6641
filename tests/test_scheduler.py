"""Tests for Scheduler batching."""

import logging

import pytest

from hookloop import ALWAYS, ManualHost, Scheduler


class _Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return 0


class TestRequestFlush:
    def test_coalesces_requests(self):
        host = ManualHost()
        evaluate = _Counter()
        sched = Scheduler(host, evaluate)
        for _ in range(5):
            sched.request_flush()
        assert host.scheduled == 1
        assert sched.pending
        host.run_pending()
        assert evaluate.calls == 1
        assert not sched.pending

    def test_nothing_runs_synchronously(self):
        host = ManualHost()
        evaluate = _Counter()
        Scheduler(host, evaluate).request_flush()
        assert evaluate.calls == 0

    def test_new_request_after_flush(self):
        host = ManualHost()
        evaluate = _Counter()
        sched = Scheduler(host, evaluate)
        sched.request_flush()
        host.run_pending()
        sched.request_flush()
        host.run_pending()
        assert evaluate.calls == 2
        assert sched.flush_count == 2

    def test_flag_cleared_before_evaluation(self):
        host = ManualHost()
        seen = []

        def evaluate():
            seen.append(sched.pending)

        sched = Scheduler(host, evaluate)
        sched.request_flush()
        host.run_pending()
        assert seen == [False]

    def test_delay_passed_to_host(self):
        host = ManualHost()
        evaluate = _Counter()
        Scheduler(host, evaluate, delay=0.5).request_flush()
        host.run_pending()
        assert evaluate.calls == 0
        host.advance(0.5)
        assert evaluate.calls == 1

    def test_failure_leaves_flag_clear(self):
        host = ManualHost()

        def evaluate():
            raise RuntimeError("effect failed")

        sched = Scheduler(host, evaluate)
        sched.request_flush()
        with pytest.raises(RuntimeError):
            host.run_pending()
        assert not sched.pending
        sched.request_flush()
        assert host.pending == 1

    def test_logs_at_debug(self, caplog):
        host = ManualHost()
        sched = Scheduler(host, _Counter())
        with caplog.at_level(logging.DEBUG, logger="hookloop.scheduler"):
            sched.request_flush()
            host.run_pending()
        assert "flush scheduled" in caplog.text
        assert "flush #1" in caplog.text


class TestBatchingThroughRuntime:
    def test_three_sets_one_flush(self, host, rt):
        c = rt.use_state(0)
        log = []
        rt.use_effect(lambda: log.append(c.get()), [c])
        c.set(5)
        c.set(6)
        c.set(7)
        assert host.scheduled == 1
        host.run_pending()
        assert log == [7]
        assert rt.scheduler.flush_count == 1

    def test_set_inside_effect_schedules_next_tick(self, host, rt):
        a = rt.use_state(0)
        b = rt.use_state(0)
        log = []
        rt.use_effect(lambda: b.set(a.get() * 10), [a])
        rt.use_effect(lambda: log.append(b.get()), [b])

        a.set(1)
        host.run_pending()
        # b was written during this flush; its effect saw the new value already,
        # and a fresh flush was queued for the write.
        assert log == [10]
        assert rt.scheduler.pending
        assert host.pending == 1

        host.run_pending()
        assert log == [10]  # b unchanged on the follow-up pass
        assert not rt.scheduler.pending

    def test_write_to_earlier_effect_dep_is_not_lost(self, host, rt):
        a = rt.use_state(0)
        b = rt.use_state(0)
        log = []
        rt.use_effect(lambda: log.append(("a", a.get())), [a])
        rt.use_effect(lambda: a.set(b.get()), [b])

        rt.request_flush()
        host.run_pending()
        assert log == [("a", 0)]

        b.set(3)
        host.run_pending()  # second effect writes a; first already evaluated
        assert log == [("a", 0)]
        host.run_pending()  # follow-up flush picks it up
        assert log == [("a", 0), ("a", 3)]

    def test_unconditional_effect_without_mutation(self, host, rt):
        log = []
        rt.use_effect(lambda: log.append("tick"), ALWAYS)
        rt.request_flush()
        host.run_pending()
        rt.request_flush()
        host.run_pending()
        assert log == ["tick", "tick"]
