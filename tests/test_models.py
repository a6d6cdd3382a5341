"""Tests for the data models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from neuro_narrative.models import (
    AIState,
    BrainWaves,
    ConsolidationConfig,
    LongTermMemory,
    WorldState,
    WorldUpdate,
)


class TestWorldState:
    def test_alias_and_field_name(self):
        assert WorldState(neuralActivity=0.2).neural_activity == 0.2
        assert WorldState(neural_activity=0.3).neural_activity == 0.3

    def test_activity_bounds_on_construction(self):
        with pytest.raises(ValidationError):
            WorldState(neural_activity=1.5)

    def test_lists_not_shared(self):
        a, b = WorldState(), WorldState()
        a.events.append("x")
        assert b.events == []


class TestWorldUpdate:
    def test_empty(self):
        assert WorldUpdate().is_empty()
        assert not WorldUpdate(items=[]).is_empty()


class TestLongTermMemory:
    def test_dump_by_alias(self):
        now = datetime(2026, 10, 19, 1, 0)
        record = LongTermMemory(
            id="ltm_1", info="x", original_timestamp=now, consolidation_timestamp=now
        )
        dumped = record.model_dump(by_alias=True)
        assert set(dumped) == {"id", "info", "originalTimestamp", "consolidationTimestamp"}


class TestAIState:
    def test_sleep_state_literal(self):
        waves = BrainWaves(alpha=0.5, beta=0.7, theta=0.6, delta=0.4)
        with pytest.raises(ValidationError):
            AIState(emotion="curious", sleep_state="dozing", brain_waves=waves)


class TestConsolidationConfig:
    def test_defaults(self):
        config = ConsolidationConfig()
        assert config.interval_seconds == 3600
        assert config.min_age_hours == 24
        assert config.importance_threshold == 0.7
        assert config.activity_decay == 0.2
