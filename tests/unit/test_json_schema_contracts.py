"""
Tests for JSON Schema Contract Validators

- Schemas themselves are valid Draft 2020-12
- Valid data accepted
- Missing required fields, wrong types and constraint violations detected
- Integration with the Pydantic models (model dumps match the contracts)
"""

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    PlayerLedgerValidator,
    SchemaLoader,
    SettlementResultValidator,
    validate_player_ledger,
    validate_settlement_result,
)
from src.core.domain import NetPosition, PlayerRecord
from src.settlement import settle


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_player_ledger():
    """Valid stored / exported record list."""
    return [
        {"id": 1700000000000, "name": "Alice", "buyIn": 100, "cashOut": 150, "delta": 50},
        {"id": 1700000000001, "name": "", "buyIn": 0, "cashOut": 0, "delta": -50},
    ]


@pytest.fixture
def valid_settlement_result():
    """Valid settlement result dump."""
    return {
        "adjusted_positions": [
            {"participant_id": 1, "name": "A", "net_amount": "100.00", "dampened": True},
            {"participant_id": 2, "name": "B", "net_amount": "-50.00", "dampened": False},
            {"participant_id": 3, "name": "C", "net_amount": "-50.00", "dampened": False},
        ],
        "transactions": [
            {"payer_id": 2, "payer": "B", "payee_id": 1, "payee": "A", "amount": "50.00"},
            {"payer_id": 3, "payer": "C", "payee_id": 1, "payee": "A", "amount": "50.00"},
        ],
        "summary": {
            "total_gains": "150.00",
            "total_losses": "100.00",
            "dampening_applied": True,
            "dampening_target": "gains",
            "dampening_factor": 0.6666666666666666,
            "excess_amount": "50.00",
        },
    }


# =============================================================================
# SCHEMA LOADING
# =============================================================================


class TestSchemaLoader:
    """Tests for SchemaLoader"""

    def test_schemas_load(self) -> None:
        loader = SchemaLoader()
        for name in ("player_ledger", "settlement_result"):
            schema = loader.load_schema(name)
            assert schema["$schema"].endswith("2020-12/schema")

    def test_schema_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("player_ledger") is loader.load_schema("player_ledger")

    def test_unknown_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("position_ledger")

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "nope")

    def test_invalid_schema_rejected(self, tmp_path) -> None:
        (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# PLAYER LEDGER
# =============================================================================


class TestPlayerLedgerContract:
    """Tests for the player_ledger contract"""

    def test_valid(self, valid_player_ledger) -> None:
        validate_player_ledger(valid_player_ledger)
        assert PlayerLedgerValidator().is_valid(valid_player_ledger)

    def test_empty_list_is_valid(self) -> None:
        validate_player_ledger([])

    def test_not_a_list(self) -> None:
        with pytest.raises(ValidationError):
            validate_player_ledger({"id": 1})

    def test_missing_id(self, valid_player_ledger) -> None:
        del valid_player_ledger[0]["id"]
        with pytest.raises(ValidationError, match="'id' is a required property"):
            validate_player_ledger(valid_player_ledger)

    def test_wrong_types_all_reported(self, valid_player_ledger) -> None:
        valid_player_ledger[0]["buyIn"] = [100]
        valid_player_ledger[1]["id"] = 1.5
        errors = list(PlayerLedgerValidator().iter_errors(valid_player_ledger))
        assert len(errors) == 2

    def test_player_record_dump_matches(self) -> None:
        record = PlayerRecord(id=1, name="A", buyIn=5, cashOut=7)
        validate_player_ledger([record.to_record()])


# =============================================================================
# SETTLEMENT RESULT
# =============================================================================


class TestSettlementResultContract:
    """Tests for the settlement_result contract"""

    def test_valid(self, valid_settlement_result) -> None:
        validate_settlement_result(valid_settlement_result)

    def test_untouched_summary(self, valid_settlement_result) -> None:
        valid_settlement_result["summary"]["dampening_applied"] = False
        valid_settlement_result["summary"]["dampening_target"] = None
        valid_settlement_result["summary"]["dampening_factor"] = 1.0
        validate_settlement_result(valid_settlement_result)

    def test_missing_summary(self, valid_settlement_result) -> None:
        del valid_settlement_result["summary"]
        with pytest.raises(ValidationError):
            validate_settlement_result(valid_settlement_result)

    def test_negative_transaction_amount(self, valid_settlement_result) -> None:
        valid_settlement_result["transactions"][0]["amount"] = "-50.00"
        with pytest.raises(ValidationError):
            validate_settlement_result(valid_settlement_result)

    def test_numeric_amount_rejected(self, valid_settlement_result) -> None:
        valid_settlement_result["transactions"][0]["amount"] = 50.0
        with pytest.raises(ValidationError):
            validate_settlement_result(valid_settlement_result)

    def test_unknown_target(self, valid_settlement_result) -> None:
        valid_settlement_result["summary"]["dampening_target"] = "winners"
        with pytest.raises(ValidationError):
            validate_settlement_result(valid_settlement_result)

    def test_factor_out_of_range(self, valid_settlement_result) -> None:
        valid_settlement_result["summary"]["dampening_factor"] = 1.2
        assert not SettlementResultValidator().is_valid(valid_settlement_result)

    def test_extra_field_rejected(self, valid_settlement_result) -> None:
        valid_settlement_result["fees"] = []
        with pytest.raises(ValidationError):
            validate_settlement_result(valid_settlement_result)

    @pytest.mark.parametrize(
        "amounts",
        [
            [],
            [0, 0],
            [100, -100],
            [150, -50, -50],
            [40, -60, -20],
            [0.005, -0.005],
            [12.34, 56.78, -1000],
            [1e30, -1e30],
            ["0.004", "-0.006"],
            ["1E-7", "-2E-7"],
        ],
    )
    def test_engine_output_matches(self, amounts) -> None:
        positions = [
            NetPosition(participant_id=k, name=f"P{k}", net_amount=a)
            for k, a in enumerate(amounts)
        ]
        validate_settlement_result(settle(positions).to_dict())
