"""Interface to the wallet engine behind the ``hw`` commands.

The engine owns key derivation, signing, multisig bookkeeping and storage.
This package only ever talks to it through the operations below, one call
per command invocation.  Results are plain JSON-compatible values; ``None``
means there is nothing to print.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from bitcoin.core import CTransaction

from .keys import XPubKey
from .options import SigHash


class WalletEngineError(RuntimeError):
    """Base class for failures reported by a wallet engine."""


class WalletEngine(Protocol):
    def init_mnemonic(self, passphrase: str, mnemonic: str | None) -> Any: ...

    def list_addresses(self, account: str, page: int, per_page: int) -> Any: ...

    def generate_with_labels(self, account: str, labels: Sequence[str]) -> Any: ...

    def generate_addresses(self, account: str, count: int) -> Any: ...

    def label_address(self, account: str, index: int, label: str) -> Any: ...

    def balance(self, account: str) -> Any: ...

    def balances(self) -> Any: ...

    def list_transactions(self, account: str) -> Any: ...

    def send(self, account: str, address: str, amount: int, fee: int) -> Any: ...

    def send_many(
        self, account: str, destinations: Sequence[tuple[str, int]], fee: int
    ) -> Any: ...

    def new_account(self, name: str) -> Any: ...

    def new_multisig(self, name: str, m: int, n: int, keys: Sequence[XPubKey]) -> Any: ...

    def add_keys(self, account: str, keys: Sequence[XPubKey]) -> Any: ...

    def account_info(self, account: str) -> Any: ...

    def list_accounts(self) -> Any: ...

    def dump_keys(self, account: str) -> Any: ...

    def dump_wif(self, account: str, index: int) -> Any: ...

    def coins(self, account: str) -> Any: ...

    def all_coins(self) -> Any: ...

    def sign_tx(self, account: str, tx: CTransaction, sighash: SigHash) -> Any: ...

    def import_tx(self, tx: CTransaction) -> Any: ...

    def remove_tx(self, txid: str) -> Any: ...

    def decode_tx(self, raw_hex: str) -> Any: ...

    def build_raw_tx(self, inputs_json: str, outputs_json: str) -> Any: ...

    def sign_raw_tx(
        self, tx: CTransaction, sigdata_json: str, keys_json: str, sighash: SigHash
    ) -> Any: ...
