"""
JSON Schema Contract Validators

Validates JSON data against the formal JSON Schema contracts with the
jsonschema library.

Schemas (shipped in src/core/contracts/schema/):
- player_ledger.json     (stored / exported / shared player records)
- settlement_result.json (SettlementResult.to_dict())
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    JSON Schema file loader.

    Looks the schemas up in the schema/ directory next to this module.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Loaded schema cache
        self._schemas: Dict[str, Any] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'player_ledger')

        Returns:
            The loaded schema as a dict

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation of the schema itself
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Module-level loader instance
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Base class for contract validators.

    Wraps validation of data against one JSON Schema.
    """

    def __init__(self, schema_name: str):
        """
        Args:
            schema_name: Name of the schema to validate against
        """
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Validate data against the schema.

        Raises:
            ValidationError: If the data does not match the schema
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Check validity without raising."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        """
        Iterate over all validation errors.

        Yields:
            ValidationError for every violation found
        """
        return self.validator.iter_errors(data)


class PlayerLedgerValidator(ContractValidator):
    """Validator for the player_ledger contract."""

    def __init__(self):
        super().__init__("player_ledger")


class SettlementResultValidator(ContractValidator):
    """Validator for the settlement_result contract."""

    def __init__(self):
        super().__init__("settlement_result")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_player_ledger(data: Any) -> None:
    """
    Validate a list of player records.

    Raises:
        ValidationError: If the data does not match the schema
    """
    PlayerLedgerValidator().validate(data)


def validate_settlement_result(data: Dict[str, Any]) -> None:
    """
    Validate a settlement result dump.

    Raises:
        ValidationError: If the data does not match the schema
    """
    SettlementResultValidator().validate(data)
