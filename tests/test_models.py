"""
Tests for core models: working buffers, verdict states and run statistics.
"""
import pytest
from cmpfiles.core.models import WorkingBuffer, MatchState, CompareStats


class TestWorkingBuffer:

    def test_data_is_limited_to_count(self):
        buffer = WorkingBuffer(8)
        buffer.view[:3] = b"abc"
        buffer.count = 3
        assert bytes(buffer.data) == b"abc"

    def test_same_content_compares_valid_bytes_only(self):
        first, second = WorkingBuffer(4), WorkingBuffer(4)
        first.view[:4] = b"abXX"
        second.view[:4] = b"abYY"
        first.count = second.count = 2

        assert first.same_content(second)
        second.count = 3
        assert not first.same_content(second)

    def test_release(self):
        buffer = WorkingBuffer(4)
        buffer.release()
        buffer.release()

        assert buffer.released
        with pytest.raises(ValueError):
            buffer.view

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            WorkingBuffer(0)


class TestMatchState:

    def test_terminal_states(self):
        assert not MatchState.UNKNOWN.is_terminal
        assert MatchState.MATCHED.is_terminal
        assert MatchState.NOT_MATCHED.is_terminal

    def test_display_name(self):
        assert MatchState.NOT_MATCHED.display_name == "Not matched"


class TestCompareStats:

    def test_update_round_accumulates(self):
        stats = CompareStats()
        stats.update_round(bytes_read=10, decided=0, total=3)
        stats.update_round(bytes_read=4, decided=3, total=3)

        assert stats.rounds == 2
        assert stats.bytes_read == 14
        assert stats.decided_per_round == [0, 3]
        assert "Rounds: 2" in stats.print_summary()

    def test_failing_listener_does_not_stop_updates(self):
        stats = CompareStats()
        seen = []

        def broken(round_number, update):
            raise RuntimeError("listener failure")

        stats.add_listener(broken)
        stats.add_listener(lambda round_number, update: seen.append((round_number, update["decided"])))
        stats.update_round(bytes_read=1, decided=1, total=1)

        assert seen == [(1, 1)]
