"""
LedgerStore — local JSON file persistence of player records

Pass-through storage: the file holds exactly the exported record list.
Only inputs are persisted; settlement results never are.
"""

import json
import logging
from pathlib import Path
from typing import Callable, Final

from .ledger import LedgerFormatError, PlayerLedger

logger = logging.getLogger(__name__)

# Default store file name
STORAGE_FILENAME: Final[str] = "poker-calculator-data.json"


class LedgerStore:
    """
    File-backed ledger storage.

    load() never fails: a missing, empty or corrupt store yields a ledger
    holding one blank player, so there is always a row to edit.
    """

    def __init__(
        self,
        path: Path | str = STORAGE_FILENAME,
        clock: Callable[[], int] | None = None,
    ):
        self.path = Path(path)
        self._clock = clock

    def load(self) -> PlayerLedger:
        """Load the stored ledger (one blank player if nothing usable)."""
        ledger = PlayerLedger(clock=self._clock)

        if self.path.exists():
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                ledger = PlayerLedger.from_records(data, clock=self._clock)
                logger.debug("Loaded %d players from %s", len(ledger), self.path)
            except (OSError, UnicodeDecodeError, json.JSONDecodeError, LedgerFormatError) as e:
                logger.error("Error loading data from %s: %s", self.path, e)
                ledger = PlayerLedger(clock=self._clock)

        if len(ledger) == 0:
            ledger.add_player()

        return ledger

    def save(self, ledger: PlayerLedger) -> None:
        """Write the ledger records to the store file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(ledger.to_records(), f)
        logger.debug("Saved %d players to %s", len(ledger), self.path)

    def clear(self) -> None:
        """Delete the store file if present."""
        self.path.unlink(missing_ok=True)
