"""Tests for the snooze table definition."""

from haccpctl.infrastructure.database.schema import metadata, step_snoozes


def test_only_snoozes_are_durable() -> None:
    assert set(metadata.tables) == {"step_snoozes"}


def test_composite_key() -> None:
    assert [c.name for c in step_snoozes.primary_key.columns] == ["tenant", "step_key"]
