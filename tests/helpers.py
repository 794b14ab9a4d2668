from __future__ import annotations

import struct
from typing import Any

from hw_wallet.keys import b58check_encode

# secp256k1 generator point, compressed
GENERATOR = bytes.fromhex("0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")

LEGACY_TX_HEX = (
    "01000000"  # version
    "01"  # input count
    + "11" * 32  # previous txid
    + "00000000"  # previous index
    "00"  # empty scriptSig
    "ffffffff"  # sequence
    "01"  # output count
    "1027000000000000"  # 10000 satoshi
    "19"  # scriptPubKey length
    "76a914" + "22" * 20 + "88ac"
    + "00000000"  # locktime
)

SEGWIT_TX_HEX = (
    "02000000"
    "0001"  # marker + flag
    "01"
    + "33" * 32
    + "01000000"
    "00"
    "feffffff"
    "01"
    "e803000000000000"
    "16"
    "0014" + "44" * 20
    + "02"  # witness item count
    "02aabb"
    "01cc"
    "00000000"
)


def make_xpub(
    *,
    version: int = 0x0488B21E,
    depth: int = 0,
    fingerprint: bytes = b"\x00" * 4,
    child: int = 0,
    chain_code: bytes = b"\x01" * 32,
    public_key: bytes = GENERATOR,
) -> str:
    payload = (
        struct.pack(">IB", version, depth)
        + fingerprint
        + struct.pack(">I", child)
        + chain_code
        + public_key
    )
    return b58check_encode(payload)


class RecordingEngine:
    """Wallet engine stub that records every operation it receives."""

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        def operation(*args: Any) -> Any:
            self.calls.append((name, args))
            if self.error is not None:
                raise self.error
            return self.result

        return operation
