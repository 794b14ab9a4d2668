from __future__ import annotations

import pytest

from hw_wallet.decoder import (
    DESTINATION_DECODE_ERROR,
    KEYS_DECODE_ERROR,
    TX_DECODE_ERROR,
    decode_destinations,
    decode_integer,
    decode_keys,
    decode_transaction,
)
from hw_wallet.result import Err, Ok, Stage
from hw_wallet.tx import transaction_to_hex

from helpers import LEGACY_TX_HEX, make_xpub


def test_decode_transaction_round_trips_hex() -> None:
    result = decode_transaction(LEGACY_TX_HEX)

    assert isinstance(result, Ok)
    assert transaction_to_hex(result.value) == LEGACY_TX_HEX


@pytest.mark.parametrize(
    "raw",
    [
        "not-valid-hex",
        "deadbeef",
        LEGACY_TX_HEX + "ff",
        " ".join(LEGACY_TX_HEX[i : i + 8] for i in range(0, len(LEGACY_TX_HEX), 8)),
    ],
)
def test_decode_transaction_failures(raw: str) -> None:
    assert decode_transaction(raw) == Err(Stage.DECODE, TX_DECODE_ERROR)


def test_decode_keys_accepts_valid_batch() -> None:
    tokens = [make_xpub(), make_xpub(chain_code=b"\x02" * 32)]
    result = decode_keys(tokens)

    assert isinstance(result, Ok)
    assert [key.to_string() for key in result.value] == tokens


def test_decode_keys_rejects_whole_batch_for_one_bad_key() -> None:
    tokens = [make_xpub(), "xpub-garbage", make_xpub(chain_code=b"\x03" * 32)]

    assert decode_keys(tokens) == Err(Stage.DECODE, KEYS_DECODE_ERROR)


def test_decode_destinations_splits_on_first_colon() -> None:
    result = decode_destinations(["addr1:100", "addr2:200"])

    assert result == Ok([("addr1", 100), ("addr2", 200)])


@pytest.mark.parametrize(
    "token", ["addr1", "addr1:", ":100", "addr1:1.5", "addr1:100:5", "addr1:1_000", "addr1:+5"]
)
def test_decode_destinations_rejects_bad_tokens(token: str) -> None:
    result = decode_destinations(["good:1", token])

    assert result == Err(Stage.DECODE, DESTINATION_DECODE_ERROR)


def test_decode_integer_names_the_value() -> None:
    assert decode_integer("12", "page number") == Ok(12)
    failure = decode_integer("twelve", "page number")
    assert isinstance(failure, Err)
    assert failure.message == "Invalid page number: twelve"


@pytest.mark.parametrize("raw", ["1_000", "+5", "١٢", " 3", "3\n"])
def test_decode_integer_accepts_only_ascii_digits(raw: str) -> None:
    assert decode_integer(raw, "address index") == Err(Stage.DECODE, f"Invalid address index: {raw}")


def test_decode_integer_keeps_leading_minus() -> None:
    assert decode_integer("-3", "page number") == Ok(-3)
