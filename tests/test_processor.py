"""
Tests for the ingestion cycle.
"""

from killtracker.parser.events import ItemAcquiredEvent, KillCountEvent
from killtracker.streaming.processor import ChatStreamProcessor, TrackerStatus
from killtracker.streaming.source import FetchResult, StaticLineSource


class TestProcessResult:
    """Test processing fetch results."""

    def test_full_window(self, processor, store, sample_chat_lines):
        cycle = processor.process_result(StaticLineSource(sample_chat_lines).fetch_recent())

        assert cycle.status is TrackerStatus.RUNNING
        assert cycle.lines_fetched == 7
        assert cycle.new_lines == 7
        assert [type(e) for e in cycle.events] == [
            KillCountEvent,
            KillCountEvent,
            KillCountEvent,
            ItemAcquiredEvent,
        ]
        assert cycle.merges == 4

        vorkath = store.get("vorkath_hm")
        assert vorkath.kill_count == 5
        assert vorkath.pet_acquired is False

        graardor = store.get("general_graardor_nm")
        assert graardor.kill_count == 12
        assert graardor.pet_acquired is True

    def test_redelivered_lines_are_skipped(self, processor, store, backend, sample_chat_lines):
        source = StaticLineSource(sample_chat_lines)
        processor.process_result(source.fetch_recent())
        writes = backend.writes

        cycle = processor.process_result(source.fetch_recent())

        assert cycle.new_lines == 0
        assert cycle.events == []
        assert backend.writes == writes

    def test_only_new_lines_processed(self, processor, store):
        source = StaticLineSource(["You have killed 5 Vorkath (hm)."])
        processor.process_result(source.fetch_recent())

        source.push("You have killed 6 Vorkath (hm).")
        cycle = processor.process_result(source.fetch_recent())

        assert cycle.new_lines == 1
        assert store.get("vorkath_hm").kill_count == 6

    def test_unavailable_source(self, processor, backend):
        cycle = processor.process_result(FetchResult.unavailable("host not ready"))

        assert cycle.status is TrackerStatus.SOURCE_UNAVAILABLE
        assert cycle.note == "host not ready"
        assert backend.writes == 0
        assert processor.get_stats()["unavailable_cycles"] == 1

    def test_window_limits_lines(self, store):
        processor = ChatStreamProcessor(store, window=30)
        lines = ["You have killed 5 Vorkath (hm)."] + [f"chatter {i}" for i in range(30)]

        cycle = processor.process_result(FetchResult(ok=True, lines=lines))

        assert cycle.lines_fetched == 30
        assert store.get("vorkath_hm") is None

    def test_structured_and_empty_records(self, processor, store):
        lines = [
            {"text": "You have killed 5 Vorkath (hm)."},
            None,
            {"unknown": "shape"},
            "",
            {"message": "A golden beam shines over one of your items, You receive: 1x Vorkath's Claw"},
        ]
        cycle = processor.process_result(FetchResult(ok=True, lines=lines))

        assert cycle.new_lines == 2
        assert store.get("vorkath_hm").pet_acquired is True


class TestSessionLifecycle:
    """Test starting a clean tracking run."""

    def test_start_session_clears_transient_state(self, processor, store, sample_chat_lines):
        processor.process_lines(sample_chat_lines)
        processor.start_session()

        assert processor.session.current_subject is None
        assert len(processor.dedup) == 0
        assert not processor.parser.debug_lines

        # Stored data is durable across runs
        assert store.get("general_graardor_nm").pet_acquired is True

        cycle = processor.process_lines(sample_chat_lines)
        assert cycle.new_lines == 7

    def test_stats(self, processor, sample_chat_lines):
        processor.process_result(FetchResult(ok=True, lines=sample_chat_lines))
        stats = processor.get_stats()

        assert stats["cycles"] == 1
        assert stats["new_lines"] == 7
        assert stats["merges"] == 4
        assert stats["parser"]["kill_events"] == 3
        assert stats["dedup"]["size"] == 7
        assert stats["session"]["record_key"] == "general_graardor_nm"
