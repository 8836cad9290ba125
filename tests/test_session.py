"""
Tests for the session state transitions.
"""

import pytest

from killtracker.parser.events import ItemAcquiredEvent, KillCountEvent, Mode
from killtracker.parser.extractor import EventExtractor
from killtracker.streaming.session import SessionState


def kill(subject, count, mode=Mode.NONE):
    return KillCountEvent(kill_count=count, subject_raw=subject, mode=mode)


PET = ItemAcquiredEvent(item_name="ribs of chaos")


@pytest.fixture
def session():
    """Create an empty session."""
    return SessionState()


class TestKillTransition:
    """Kill count events switch the current boss."""

    def test_sets_current_boss_and_persists(self, session, store):
        assert session.apply(kill("Vorkath", 5, Mode.HARD), store) is True

        assert session.current_subject == "Vorkath"
        assert session.current_mode is Mode.HARD
        assert session.current_kill_count == 5
        assert session.current_pet_flag is False
        assert session.record_key == "vorkath_hm"

        record = store.get("vorkath_hm")
        assert record.kill_count == 5
        assert record.pet_acquired is False

    def test_new_kill_clears_flag_for_new_boss(self, session, store):
        session.apply(kill("Vorkath", 5, Mode.HARD), store)
        session.apply(PET, store)
        session.apply(kill("Zulrah", 1), store)

        assert session.current_pet_flag is False
        assert not store.has_pet("zulrah")

    def test_switching_back_restores_flag(self, session, store):
        session.apply(kill("Vorkath", 5, Mode.HARD), store)
        session.apply(PET, store)
        session.apply(kill("General Graardor", 12, Mode.NORMAL), store)
        assert session.current_pet_flag is False

        session.apply(kill("Vorkath", 6, Mode.HARD), store)

        assert session.current_pet_flag is True
        record = store.get("vorkath_hm")
        assert record.kill_count == 6
        assert record.pet_acquired is True

    def test_same_boss_other_mode_has_own_flag(self, session, store):
        session.apply(kill("Vorkath", 5, Mode.HARD), store)
        session.apply(PET, store)
        session.apply(kill("Vorkath", 80), store)

        assert session.current_pet_flag is False
        assert store.has_pet("vorkath_hm")
        assert not store.has_pet("vorkath")

    def test_flag_survives_restart(self, store):
        first = SessionState()
        first.apply(kill("Vorkath", 5, Mode.HARD), store)
        first.apply(PET, store)

        second = SessionState()
        second.apply(kill("VORKATH", 6, Mode.HARD), store)

        assert second.current_pet_flag is True


class TestItemTransition:
    """Pet drop events mark the current boss."""

    def test_sets_flag_and_persists(self, session, store):
        session.apply(kill("Vorkath", 5, Mode.HARD), store)

        assert session.apply(PET, store) is True
        assert session.current_pet_flag is True
        assert store.has_pet("vorkath_hm")

    def test_repeat_drop_is_a_no_op(self, session, store):
        session.apply(kill("Vorkath", 5, Mode.HARD), store)
        session.apply(PET, store)
        stamped = store.get("vorkath_hm").updated_at

        assert session.apply(PET, store) is False
        assert store.get("vorkath_hm").updated_at == stamped

    def test_drop_before_any_kill_is_ignored(self, session, store, backend):
        assert session.apply(PET, store) is False

        assert session.current_pet_flag is False
        assert backend.writes == 0

    def test_drop_after_stored_pet_is_a_no_op(self, session, store):
        session.apply(kill("Vorkath", 5, Mode.HARD), store)
        session.apply(PET, store)
        session.apply(kill("Vorkath", 6, Mode.HARD), store)
        writes = store.backend.writes

        assert session.apply(PET, store) is False
        assert store.backend.writes == writes


class TestNoEvent:
    """Ordinary chat changes nothing."""

    def test_none(self, session, store, backend):
        assert session.apply(None, store) is False
        assert session.current_subject is None
        assert backend.writes == 0


class TestScenarios:
    """End to end scenarios through the extractor."""

    def test_untracked_golden_beam(self, session, store):
        extractor = EventExtractor()
        session.apply(extractor.extract("You have killed 5 Vorkath (hm)."), store)
        session.apply(
            extractor.extract(
                "A golden beam shines over one of your items, You receive: 1x Brawling Gloves"
            ),
            store,
        )

        assert session.current_pet_flag is False
        assert store.has_pet("vorkath_hm") is False

    def test_tracked_golden_beam(self, session, store):
        extractor = EventExtractor()
        session.apply(extractor.extract("You have killed 12 General Graardor in normal mode."), store)
        session.apply(
            extractor.extract(
                "A golden beam shines over one of your items, You receive: 1x Ribs of Chaos"
            ),
            store,
        )

        assert store.get("general_graardor_nm").pet_acquired is True


class TestResetAndDisplay:
    """Test reset and dictionary view."""

    def test_reset(self, session, store):
        session.apply(kill("Vorkath", 5, Mode.HARD), store)
        session.apply(PET, store)
        session.reset()

        assert session == SessionState()
        assert session.record_key is None

    def test_to_dict(self, session, store):
        assert session.to_dict()["kill_count"] is None

        session.apply(kill("Vorkath", 5, Mode.HARD), store)
        view = session.to_dict()

        assert view["subject"] == "Vorkath"
        assert view["mode"] == "hm"
        assert view["kill_count"] == 5
        assert view["pet"] is False
        assert view["record_key"] == "vorkath_hm"
