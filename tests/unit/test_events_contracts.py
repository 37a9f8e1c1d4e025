"""
Tests for pool events and JSON Schema contract

Комплексное тестирование контракта уведомлений пула:
- Валидность самой схемы
- Валидация правильных событий
- Детекция нарушений required полей payload
- Детекция нарушений типов и constraints
- Интеграция с Pydantic моделью PoolEvent и EventLog
"""

import pytest
from jsonschema import Draft202012Validator, ValidationError

from src.core.contracts import PoolEventValidator, SchemaLoader, validate_pool_event
from src.core.domain.events import EventLog, EventType, PoolEvent


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def trade_event():
    """Валидное TradeExecuted событие."""
    return PoolEvent(
        event_type=EventType.TRADE_EXECUTED,
        pool_id="pool-1",
        sequence=3,
        timestamp=1_700,
        actor="alice",
        data={
            "trader": "alice",
            "direction": "A_TO_B",
            "amount_in": 10,
            "amount_out": 8,
            "fee": 1,
        },
    )


@pytest.fixture
def liquidity_event():
    return PoolEvent(
        event_type=EventType.LIQUIDITY_ADDED,
        pool_id="pool-1",
        sequence=0,
        timestamp=0,
        actor="alice",
        data={
            "provider": "alice",
            "amount_a": 1_000_000,
            "amount_b": 1_000_000,
            "claim_minted": 999_000,
            "sink_minted": 1_000,
        },
    )


# =============================================================================
# SCHEMA
# =============================================================================


class TestSchema:
    def test_schema_is_valid_draft_2020_12(self):
        schema = SchemaLoader().load_schema("pool_event")
        Draft202012Validator.check_schema(schema)

    def test_schema_lists_every_event_type(self):
        assert PoolEventValidator().declared_event_types() == {e.value for e in EventType}

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_schema_dir(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")
        with pytest.raises(ValueError):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# VALIDATION
# =============================================================================


class TestPoolEventValidation:
    def test_valid_trade(self, trade_event):
        validate_pool_event(trade_event.to_dict())

    def test_valid_liquidity(self, liquidity_event):
        validate_pool_event(liquidity_event.to_dict())

    def test_to_dict_serializes_enum(self, trade_event):
        assert trade_event.to_dict()["event_type"] == "TradeExecuted"

    def test_missing_payload_field(self, trade_event):
        data = trade_event.to_dict()
        del data["data"]["fee"]
        with pytest.raises(ValidationError):
            validate_pool_event(data)

    def test_negative_amount(self, liquidity_event):
        data = liquidity_event.to_dict()
        data["data"]["amount_a"] = -1
        with pytest.raises(ValidationError):
            validate_pool_event(data)

    def test_unknown_direction(self, trade_event):
        data = trade_event.to_dict()
        data["data"]["direction"] = "SIDEWAYS"
        with pytest.raises(ValidationError):
            validate_pool_event(data)

    def test_extra_top_level_field(self, trade_event):
        data = trade_event.to_dict()
        data["unexpected"] = True
        with pytest.raises(ValidationError):
            validate_pool_event(data)

    def test_fee_update_bps_range(self):
        data = {
            "event_type": "FeeUpdated",
            "pool_id": "pool-1",
            "sequence": 9,
            "timestamp": 200_000,
            "actor": "timelock",
            "data": {"proposal_id": 1, "old_fee_bps": 30, "new_fee_bps": 1_001},
        }
        validator = PoolEventValidator()
        assert not validator.is_valid(data)
        messages = validator.error_messages(data)
        assert len(messages) == 1
        assert messages[0].startswith("$.data.new_fee_bps: 1001")
        data["data"]["new_fee_bps"] = 50
        assert validator.is_valid(data)

    def test_pause_has_no_payload(self):
        validate_pool_event(
            {
                "event_type": "Paused",
                "pool_id": "pool-1",
                "sequence": 0,
                "timestamp": 0,
                "actor": "ops",
                "data": {},
            }
        )


# =============================================================================
# EVENT LOG
# =============================================================================


class TestEventLog:
    def test_sequence_advances(self, trade_event, liquidity_event):
        log = EventLog()
        log.add(liquidity_event)
        log.add(trade_event)
        assert log.next_sequence == 2
        assert len(log) == 2

    def test_of_type_and_tail(self, trade_event, liquidity_event):
        log = EventLog()
        log.add(liquidity_event)
        log.add(trade_event)
        assert log.of_type(EventType.TRADE_EXECUTED) == [trade_event]
        assert log.tail(1) == [trade_event]
        assert log.tail(0) == []
        assert log.tail(10) == [liquidity_event, trade_event]

    def test_bounded_log(self, trade_event):
        log = EventLog(maxlen=1)
        log.add(trade_event)
        log.add(trade_event)
        assert len(log) == 1
        assert log.next_sequence == 2

    def test_truncate_drops_tail(self, trade_event, liquidity_event):
        log = EventLog()
        log.add(liquidity_event)
        mark = log.next_sequence
        log.add(trade_event.model_copy(update={"sequence": 1}))
        log.add(trade_event.model_copy(update={"sequence": 2}))

        assert log.truncate(mark) == 2
        assert log.tail() == [liquidity_event]
        assert log.next_sequence == 1

    def test_truncate_to_current_is_noop(self, liquidity_event):
        log = EventLog()
        log.add(liquidity_event)
        assert log.truncate(log.next_sequence) == 0
        assert len(log) == 1

    def test_truncate_out_of_range(self):
        log = EventLog()
        with pytest.raises(ValueError):
            log.truncate(1)
