"""Player ledger — input capture, local store, export and share links.

Collaborator layer around the settlement engine: it sources the net
positions (manual edits, stored file, shared link) and never touches
settlement output.
"""

from .ledger import LedgerFormatError, PlayerLedger
from .share import (
    ShareLinkError,
    build_share_url,
    decode_share_fragment,
    encode_share_fragment,
    export_filename,
    export_json,
    load_from_url,
    write_export,
)
from .store import STORAGE_FILENAME, LedgerStore

__all__ = [
    # Ledger
    "PlayerLedger",
    "LedgerFormatError",
    # Store
    "LedgerStore",
    "STORAGE_FILENAME",
    # Export / share
    "ShareLinkError",
    "build_share_url",
    "decode_share_fragment",
    "encode_share_fragment",
    "export_filename",
    "export_json",
    "load_from_url",
    "write_export",
]
