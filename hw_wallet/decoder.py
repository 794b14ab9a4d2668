"""Decode untrusted command-line strings into wallet domain values.

Every decoder returns a :class:`~hw_wallet.result.Result`; nothing here
raises for bad input.  Batch decoders are all-or-nothing: a single bad
element rejects the whole batch.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from bitcoin.core import CTransaction

from .keys import KeyFormatError, XPubKey
from .result import Err, Ok, Result, Stage, collect
from .tx import TransactionFormatError, transaction_from_hex

logger = logging.getLogger(__name__)

TX_DECODE_ERROR = "Could not decode transaction"
KEYS_DECODE_ERROR = "Could not decode keys"
DESTINATION_DECODE_ERROR = "sendmany: Invalid format addr:amount"

_DECIMAL_RE = re.compile(r"-?[0-9]+")


def parse_decimal(raw: str) -> int:
    """Like ``int(raw)`` but only for ASCII digits with an optional leading minus."""

    if not _DECIMAL_RE.fullmatch(raw):
        raise ValueError(f"not a decimal integer: {raw!r}")
    return int(raw)


def decode_transaction(raw_hex: str) -> Result[CTransaction]:
    try:
        tx = transaction_from_hex(raw_hex)
    except TransactionFormatError as exc:
        logger.debug("Transaction decode failed: %s", exc)
        return Err(Stage.DECODE, TX_DECODE_ERROR)
    return Ok(tx)


def decode_key(token: str) -> Result[XPubKey]:
    try:
        return Ok(XPubKey.from_string(token))
    except KeyFormatError as exc:
        logger.debug("Key decode failed for %r: %s", token, exc)
        return Err(Stage.DECODE, KEYS_DECODE_ERROR)


def decode_keys(tokens: Sequence[str]) -> Result[list[XPubKey]]:
    return collect(decode_key(token) for token in tokens)


def decode_destination(token: str) -> Result[tuple[str, int]]:
    address, sep, amount = token.partition(":")
    if not sep or not address:
        logger.debug("Destination %r is not of the form addr:amount", token)
        return Err(Stage.DECODE, DESTINATION_DECODE_ERROR)
    try:
        return Ok((address, parse_decimal(amount)))
    except ValueError:
        logger.debug("Destination %r has a non-integer amount", token)
        return Err(Stage.DECODE, DESTINATION_DECODE_ERROR)


def decode_destinations(tokens: Sequence[str]) -> Result[list[tuple[str, int]]]:
    return collect(decode_destination(token) for token in tokens)


def decode_integer(raw: str, what: str) -> Result[int]:
    try:
        return Ok(parse_decimal(raw))
    except ValueError:
        return Err(Stage.DECODE, f"Invalid {what}: {raw}")
