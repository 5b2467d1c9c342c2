"""Integration tests for session persistence.

Tests snapshot/restore and state integrity across a save.
"""

from __future__ import annotations

import json
from collections.abc import Callable

import pytest

from shitbox_engine.core.config import EngineSettings
from shitbox_engine.core.exceptions import InvalidGameStateError
from shitbox_engine.data.registry import DataRegistry
from shitbox_engine.engine.session import GameSession


class TestSessionPersistence:
    """Test session state persistence."""

    def test_snapshot_is_json(self, session: GameSession) -> None:
        """Snapshots are plain JSON text."""
        payload = json.loads(session.snapshot())

        assert payload["player"]["name"] == "Rusty"
        assert payload["meta"]["rng_seed"] == 42

    def test_snapshot_stamps_save_time(
        self,
        registry: DataRegistry,
        engine_settings: EngineSettings,
    ) -> None:
        """Snapshotting records the wall-clock save time."""
        ticks = iter([1000.0, 2000.0])
        session = GameSession.new_game(
            "Rusty",
            {"fitness": 10},
            registry,
            seed=1,
            settings=engine_settings,
            clock=lambda: next(ticks),
        )

        session.snapshot()

        assert session.state.meta.created_at == 1_000_000
        assert session.state.meta.last_saved_at == 2_000_000

    def test_restore_round_trip(
        self,
        session: GameSession,
        registry: DataRegistry,
        engine_settings: EngineSettings,
        fixed_clock: Callable[[], float],
    ) -> None:
        """A restored session holds an identical state."""
        session.perform_activity("odd_job")
        session.perform_activity("work_warehouse", {"hours": 5})

        restored = GameSession.restore(
            session.snapshot(), registry, settings=engine_settings, clock=fixed_clock
        )

        assert restored.state == session.state

    def test_restore_from_mapping(
        self,
        session: GameSession,
        registry: DataRegistry,
        engine_settings: EngineSettings,
    ) -> None:
        """Parsed snapshots are accepted too."""
        restored = GameSession.restore(
            json.loads(session.snapshot()), registry, settings=engine_settings
        )

        assert restored.state == session.state

    def test_restored_game_continues_identically(
        self,
        session: GameSession,
        registry: DataRegistry,
        engine_settings: EngineSettings,
        fixed_clock: Callable[[], float],
    ) -> None:
        """The same action after a restore has the same outcome."""
        session.perform_activity("work_warehouse", {"hours": 4})
        restored = GameSession.restore(
            session.snapshot(), registry, settings=engine_settings, clock=fixed_clock
        )

        original_result = session.perform_activity("work_warehouse", {"hours": 4})
        restored_result = restored.perform_activity("work_warehouse", {"hours": 4})

        assert original_result.state == restored_result.state

    def test_game_over_survives_restore(
        self,
        session: GameSession,
        registry: DataRegistry,
        engine_settings: EngineSettings,
    ) -> None:
        """A dead player stays dead after loading."""
        for _ in range(5):
            session.perform_activity("hibernate", {"hours": 24})
        assert session.is_game_over

        restored = GameSession.restore(session.snapshot(), registry, settings=engine_settings)

        assert restored.is_game_over
        assert restored.perform_activity("eat").error == "Game over."

    @pytest.mark.parametrize("payload", ["not json", '{"foo": 1}', {"meta": {}}])
    def test_invalid_payload(
        self,
        registry: DataRegistry,
        engine_settings: EngineSettings,
        payload: str | dict[str, object],
    ) -> None:
        """Corrupt saves raise InvalidGameStateError."""
        with pytest.raises(InvalidGameStateError):
            GameSession.restore(payload, registry, settings=engine_settings)
