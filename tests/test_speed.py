import pytest

from chacha20.chacha20_speed import measure_time, throughput


def test_measure_time_runs_repeats_and_returns_last_result():
    calls = []

    def work(x, scale=1):
        calls.append(x)
        return x * scale

    elapsed, result = measure_time(work, 3, repeats=4, scale=2)
    assert len(calls) == 4
    assert result == 6
    assert elapsed >= 0.0


def test_measure_time_runs_at_least_once():
    calls = []
    measure_time(lambda: calls.append(1), repeats=0)
    assert calls == [1]


def test_throughput():
    assert throughput(1024 * 1024, 0.5) == pytest.approx(2.0)
    assert throughput(100, 0.0) == 0.0
