"""Hex transport for raw Bitcoin transactions.

Parsing and serialization are delegated to python-bitcoinlib's
:class:`~bitcoin.core.CTransaction`, which understands both the legacy and
the BIP144 segregated-witness layouts.  Signing and validation belong to
the wallet engine.
"""

from __future__ import annotations

import re
import struct

import bitcoin.core
from bitcoin.core import CTransaction
from bitcoin.core.serialize import SerializationError

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


class TransactionFormatError(ValueError):
    """Raised when a string does not describe a well-formed transaction."""


def transaction_from_hex(raw_hex: str) -> CTransaction:
    """Parse ``raw_hex`` into a transaction, rejecting anything but plain hex digits."""

    if not _HEX_RE.fullmatch(raw_hex):
        raise TransactionFormatError("transaction must be given as plain hex digits")
    try:
        data = bytes.fromhex(raw_hex)
    except ValueError as exc:
        raise TransactionFormatError(f"invalid hex: {exc}") from exc
    try:
        return CTransaction.deserialize(data)
    except (SerializationError, ValueError, struct.error) as exc:
        raise TransactionFormatError(str(exc) or exc.__class__.__name__) from exc


def transaction_to_hex(tx: CTransaction) -> str:
    return bitcoin.core.b2x(tx.serialize())


def transaction_id(tx: CTransaction) -> str:
    """Transaction id in the usual byte-reversed hex display."""

    return bitcoin.core.b2lx(tx.GetTxid())
