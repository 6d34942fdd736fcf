"""
Export & share — pass-through serialization of player records

- JSON export: pretty-printed record list, dated file name
- Share links: base64 of the compact JSON record list, URI-component
  escaped, carried in the URL fragment

Both operate on ledger INPUT records only, never on settlement output.
"""

import base64
import binascii
import json
import logging
from datetime import date
from pathlib import Path
from typing import Final
from urllib.parse import quote, unquote, urldefrag

from .ledger import LedgerFormatError, PlayerLedger

logger = logging.getLogger(__name__)

# Characters left unescaped by a URI-component encoder
URI_COMPONENT_SAFE: Final[str] = "-_.!~*'()"


class ShareLinkError(ValueError):
    """Share-link fragment cannot be decoded into player records."""
    pass


# =============================================================================
# EXPORT
# =============================================================================


def export_json(ledger: PlayerLedger) -> str:
    """Pretty JSON (indent=2) of the ledger records."""
    return json.dumps(ledger.to_records(), indent=2)


def export_filename(day: date | None = None) -> str:
    """poker-payouts-YYYY-MM-DD.json for the given day (default: today)."""
    day = day or date.today()
    return f"poker-payouts-{day.isoformat()}.json"


def write_export(ledger: PlayerLedger, directory: Path | str, day: date | None = None) -> Path:
    """
    Write the export file into a directory.

    Returns:
        Path of the written file
    """
    path = Path(directory) / export_filename(day)
    path.write_text(export_json(ledger), encoding="utf-8")
    logger.debug("Exported %d players to %s", len(ledger), path)
    return path


# =============================================================================
# SHARE LINKS
# =============================================================================


def encode_share_fragment(ledger: PlayerLedger) -> str:
    """URL fragment payload for the ledger records."""
    payload = json.dumps(ledger.to_records(), separators=(",", ":"))
    encoded = base64.b64encode(payload.encode("utf-8")).decode("ascii")
    return quote(encoded, safe=URI_COMPONENT_SAFE)


def build_share_url(base_url: str, ledger: PlayerLedger) -> str:
    """base_url (any existing fragment dropped) + '#' + share payload."""
    base, _ = urldefrag(base_url)
    return f"{base}#{encode_share_fragment(ledger)}"


def decode_share_fragment(fragment: str) -> PlayerLedger:
    """
    Decode a share-link fragment back into a ledger.

    Args:
        fragment: Fragment text, with or without the leading '#'

    Raises:
        ShareLinkError: If the fragment is not base64 JSON, not a
            non-empty list, or violates the player_ledger contract
    """
    text = unquote(fragment.lstrip("#"))
    try:
        data = json.loads(base64.b64decode(text, validate=True).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Error loading from URL: %s", e)
        raise ShareLinkError(f"share link is not valid encoded data: {e}") from e

    if not isinstance(data, list) or not data:
        raise ShareLinkError("share link holds no player records")

    try:
        return PlayerLedger.from_records(data)
    except LedgerFormatError as e:
        logger.error("Error loading from URL: %s", e)
        raise ShareLinkError(str(e)) from e


def load_from_url(url: str) -> PlayerLedger | None:
    """
    Ledger carried by a share URL.

    Returns:
        The decoded ledger, or None when the URL has no fragment

    Raises:
        ShareLinkError: If the fragment is present but undecodable
    """
    _, fragment = urldefrag(url)
    if not fragment:
        return None
    return decode_share_fragment(fragment)
