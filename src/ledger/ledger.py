"""
PlayerLedger — ordered, editable collection of player records

Input side of the settlement engine. The ledger owns record editing
(including the delta vs buyIn/cashOut rule in PlayerRecord.with_field)
and hands the engine an immutable snapshot via to_positions().
"""

import logging
import time
from typing import Any, Callable, Iterable, Iterator, Sequence

from jsonschema import ValidationError
from pydantic import ValidationError as ModelValidationError

from src.core.contracts import validate_player_ledger
from src.core.domain.participant import NetPosition
from src.core.domain.player import PlayerRecord

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class LedgerFormatError(ValueError):
    """Player records do not match the player_ledger contract."""
    pass


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


# =============================================================================
# LEDGER
# =============================================================================


class PlayerLedger:
    """
    Ordered list of PlayerRecord rows.

    Records are immutable; every edit replaces the row in place, keeping
    its position. New player ids are millisecond timestamps, bumped when
    needed so they stay unique within the ledger.
    """

    def __init__(
        self,
        records: Iterable[PlayerRecord] = (),
        clock: Callable[[], int] | None = None,
    ):
        """
        Args:
            records: Initial rows (order preserved)
            clock: Millisecond clock used for new ids (default: wall clock)
        """
        self._records: list[PlayerRecord] = list(records)
        self._clock = clock or _now_ms

    # -------------------------------------------------------------------------
    # Construction / export
    # -------------------------------------------------------------------------

    @classmethod
    def from_records(
        cls, data: Any, clock: Callable[[], int] | None = None
    ) -> "PlayerLedger":
        """
        Build a ledger from JSON-decoded records.

        Args:
            data: List of {id, name, buyIn, cashOut, delta} dicts

        Raises:
            LedgerFormatError: If data violates the player_ledger contract
        """
        try:
            validate_player_ledger(data)
            records = [PlayerRecord.model_validate(item) for item in data]
        except (ValidationError, ModelValidationError) as e:
            raise LedgerFormatError(f"invalid player records: {e}") from e
        return cls(records, clock=clock)

    def to_records(self) -> list[dict[str, Any]]:
        """Export form of every row, in order."""
        return [record.to_record() for record in self._records]

    def to_positions(self) -> list[NetPosition]:
        """Snapshot of net positions for the settlement engine."""
        return [record.to_position() for record in self._records]

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def add_player(self, name: str = "") -> PlayerRecord:
        """Append a blank player and return it."""
        record = PlayerRecord(id=self._next_id(), name=name)
        self._records.append(record)
        logger.debug("Added player id=%s", record.id)
        return record

    def remove_player(self, player_id: int | str) -> bool:
        """
        Remove a player.

        Returns:
            True if a row was removed, False if the id is unknown
        """
        before = len(self._records)
        self._records = [r for r in self._records if r.id != player_id]
        return len(self._records) != before

    def update_player(self, player_id: int | str, field: str, value: Any) -> PlayerRecord:
        """
        Edit one field of a player (last-edited field wins).

        Raises:
            KeyError: If the player id is unknown
            ValueError: If the field is not editable
        """
        for index, record in enumerate(self._records):
            if record.id == player_id:
                updated = record.with_field(field, value)
                self._records[index] = updated
                return updated
        raise KeyError(f"unknown player id: {player_id!r}")

    def get(self, player_id: int | str) -> PlayerRecord | None:
        for record in self._records:
            if record.id == player_id:
                return record
        return None

    def clear(self) -> None:
        self._records.clear()

    # -------------------------------------------------------------------------
    # Container protocol
    # -------------------------------------------------------------------------

    @property
    def players(self) -> Sequence[PlayerRecord]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PlayerRecord]:
        return iter(tuple(self._records))

    def _next_id(self) -> int:
        candidate = self._clock()
        taken = [r.id for r in self._records if isinstance(r.id, int)]
        if taken and candidate <= max(taken):
            candidate = max(taken) + 1
        return candidate
