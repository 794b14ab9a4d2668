"""Base58check and BIP32 extended public key helpers."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

from bip_utils import Bip32KeyError, Bip32KeyNetVersions, Bip32Slip10Secp256k1

B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_B58_INDEX = {char: index for index, char in enumerate(B58_ALPHABET)}

# public version -> (network, version pair handed to the BIP32 deserializer)
XPUB_VERSIONS = {
    0x0488B21E: ("prodnet", Bip32KeyNetVersions(bytes.fromhex("0488b21e"), bytes.fromhex("0488ade4"))),
    0x043587CF: ("testnet", Bip32KeyNetVersions(bytes.fromhex("043587cf"), bytes.fromhex("04358394"))),
}


class KeyFormatError(ValueError):
    """Raised when an encoded extended key is malformed."""


def _sha256d(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def b58encode(data: bytes) -> str:
    n = int.from_bytes(data, "big")
    result = ""
    while n > 0:
        n, r = divmod(n, 58)
        result = B58_ALPHABET[r] + result
    pad = len(data) - len(data.lstrip(b"\x00"))
    return "1" * pad + result


def b58decode(text: str) -> bytes:
    n = 0
    for char in text:
        try:
            n = n * 58 + _B58_INDEX[char]
        except KeyError:
            raise KeyFormatError(f"invalid base58 character {char!r}") from None
    body = n.to_bytes((n.bit_length() + 7) // 8, "big")
    pad = len(text) - len(text.lstrip("1"))
    return b"\x00" * pad + body


def b58check_encode(payload: bytes) -> str:
    return b58encode(payload + _sha256d(payload)[:4])


def b58check_decode(text: str) -> bytes:
    """Return the payload of a base58check string after verifying its checksum."""

    data = b58decode(text)
    if len(data) < 4:
        raise KeyFormatError("base58check data too short")
    payload, checksum = data[:-4], data[-4:]
    if _sha256d(payload)[:4] != checksum:
        raise KeyFormatError("invalid base58check checksum")
    return payload


@dataclass(frozen=True)
class XPubKey:
    """BIP32 extended public key backed by a bip_utils node."""

    network: str
    node: Bip32Slip10Secp256k1 = field(compare=False, repr=False)
    text: str = ""

    @classmethod
    def from_string(cls, text: str) -> "XPubKey":
        text = text.strip()
        payload = b58check_decode(text)
        if len(payload) < 4:
            raise KeyFormatError("extended key payload too short")
        version = int.from_bytes(payload[:4], "big")
        if version not in XPUB_VERSIONS:
            raise KeyFormatError(f"unknown extended public key version 0x{version:08x}")
        network, net_versions = XPUB_VERSIONS[version]
        try:
            node = Bip32Slip10Secp256k1.FromExtendedKey(text, net_versions)
        except (ValueError, Bip32KeyError) as exc:
            raise KeyFormatError(f"invalid extended public key: {exc}") from exc
        if node.Depth().ToInt() == 0 and (
            not node.ParentFingerPrint().IsMasterKey() or node.Index().ToInt() != 0
        ):
            raise KeyFormatError("master key with non-zero parent fingerprint or child number")
        return cls(network=network, node=node, text=text)

    @property
    def depth(self) -> int:
        return self.node.Depth().ToInt()

    @property
    def child_number(self) -> int:
        return self.node.Index().ToInt()

    @property
    def chain_code(self) -> bytes:
        return self.node.ChainCode().ToBytes()

    @property
    def public_key(self) -> bytes:
        return self.node.PublicKey().RawCompressed().ToBytes()

    def to_string(self) -> str:
        return self.node.PublicKey().ToExtended()
