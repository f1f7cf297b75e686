"""Tests for the firing log and its text form."""

import io

import numpy as np
import pytest

from izhinet.errors import FiringLogOrderError
from izhinet.simulation.firing_log import FiringLog, read_firings, write_firings


@pytest.fixture
def small_log():
    log = FiringLog()
    log.append(0, [3, 7])
    log.append(2, [1])
    log.append(5, [0, 2, 9])
    return log


class TestAppend:
    def test_events_in_order(self, small_log):
        assert list(small_log) == [(0, 3), (0, 7), (2, 1), (5, 0), (5, 2), (5, 9)]
        assert len(small_log) == 6

    def test_arrays(self, small_log):
        assert small_log.times.dtype == np.int64
        assert list(small_log.times) == [0, 0, 2, 5, 5, 5]
        assert list(small_log.neurons) == [3, 7, 1, 0, 2, 9]

    def test_empty(self):
        log = FiringLog()
        assert len(log) == 0
        assert log.times.size == 0
        assert log.neurons.size == 0
        assert list(log) == []

    def test_empty_batch_ignored(self):
        log = FiringLog()
        log.append(4, [])
        log.append(1, np.array([], dtype=int))
        assert len(log) == 0

    def test_time_going_backwards(self, small_log):
        with pytest.raises(FiringLogOrderError):
            small_log.append(4, [1])

    def test_unsorted_batch(self):
        with pytest.raises(FiringLogOrderError):
            FiringLog().append(0, [5, 2])

    def test_duplicate_index(self):
        with pytest.raises(FiringLogOrderError):
            FiringLog().append(0, [2, 2])

    def test_same_time_continues_ascending(self, small_log):
        small_log.append(5, [11, 12])
        assert list(small_log.neurons[-2:]) == [11, 12]
        with pytest.raises(FiringLogOrderError):
            small_log.append(5, [4])

    def test_caller_array_not_aliased(self):
        neurons = np.array([1, 2])
        log = FiringLog()
        log.append(0, neurons)
        neurons[0] = 99
        assert list(log.neurons) == [1, 2]

    def test_equality(self, small_log):
        other = FiringLog.from_events(small_log.times, small_log.neurons)
        assert other == small_log
        other.append(6, [0])
        assert other != small_log

    def test_to_dataframe(self, small_log):
        df = small_log.to_dataframe()
        assert list(df.columns) == ["time", "neuron"]
        assert len(df) == 6
        assert df["time"].is_monotonic_increasing


class TestText:
    def test_reference_format(self, small_log):
        out = io.StringIO()
        small_log.write(out)
        assert out.getvalue() == "0 3\n0 7\n2 1\n5 0\n5 2\n5 9\n"

    def test_write_read(self, small_log, tmp_path):
        path = tmp_path / "firings.txt"
        write_firings(small_log, path)
        assert read_firings(path) == small_log

    def test_read_empty(self, tmp_path):
        path = tmp_path / "firings.txt"
        write_firings(FiringLog(), path)
        assert len(read_firings(path)) == 0

    def test_read_out_of_order(self, tmp_path):
        path = tmp_path / "firings.txt"
        path.write_text("3 1\n1 0\n")
        with pytest.raises(FiringLogOrderError):
            read_firings(path)

    def test_from_events_shape_mismatch(self):
        with pytest.raises(ValueError):
            FiringLog.from_events([0, 1], [0])
