"""JSON-RPC transport for the wallet engine.

:class:`WalletRPCClient` implements :class:`~hw_wallet.engine.WalletEngine`
by forwarding each operation to a wallet daemon.  The RPC method name is the
``hw`` command name; decoded domain values are re-encoded for the wire
(transactions as hex, extended keys as base58check, sighash as text such as
``ALL|ANYONECANPAY``).  No wallet logic is implemented here.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Optional, Sequence

import requests
from bitcoin.core import CTransaction
from requests import RequestException, Response

from .config import EngineConfig, load_engine_config
from .engine import WalletEngineError
from .keys import XPubKey
from .options import SigHash
from .tx import transaction_to_hex

logger = logging.getLogger(__name__)


class RPCError(WalletEngineError):
    """Raised when the wallet daemon responds with a JSON-RPC error."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message


class RPCTransportError(WalletEngineError):
    """Raised when the RPC endpoint is unreachable or returns malformed data."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class WalletRPCClient:
    """Wallet engine reached over HTTP JSON-RPC."""

    def __init__(self, config: EngineConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self._session = session or requests.Session()

    @classmethod
    def from_env(cls) -> "WalletRPCClient":
        """Instantiate a client using environment variables or config file."""

        return cls(load_engine_config())

    def call(self, method: str, params: Optional[list[Any]] = None) -> Any:
        """Perform a JSON-RPC request and return its ``result`` member."""

        payload = {
            "jsonrpc": "2.0",
            "id": str(uuid.uuid4()),
            "method": method,
            "params": params or [],
        }
        logger.debug("RPC call %s", method)
        try:
            response = self._session.post(
                self.config.base_url,
                data=json.dumps(payload),
                headers={"content-type": "application/json"},
                auth=self.config.auth,
                timeout=self.config.timeout,
            )
        except RequestException as exc:
            logger.debug("RPC connection failed: %s", exc, exc_info=True)
            raise RPCTransportError(
                f"RPC connection to {self.config.base_url} failed. Ensure the wallet daemon is "
                "running and HW_RPC_* variables (or ~/.hw/config.yaml) point to it."
            ) from exc
        result = self._decode_response(response)
        if result.get("error"):
            error = result["error"]
            raise RPCError(error.get("code", -1), error.get("message", "unknown"))
        return result.get("result")

    def _decode_response(self, response: Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as exc:
            logger.debug("RPC JSON parse error: %s", response.text)
            if not response.ok:
                raise RPCTransportError(
                    f"RPC server returned HTTP {response.status_code}",
                    status_code=response.status_code,
                ) from exc
            raise RPCTransportError("RPC server returned malformed JSON") from exc
        # JSON-RPC errors usually arrive with HTTP 500; keep the structured body.
        if isinstance(body, dict) and body.get("error"):
            return body
        if response.status_code == 401:
            raise RPCTransportError(
                "Unauthorized (401). Check HW_RPC_USER/HW_RPC_PASSWORD or the rpc section of "
                "~/.hw/config.yaml.",
                status_code=401,
            )
        if not response.ok:
            raise RPCTransportError(
                f"RPC server returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        if not isinstance(body, dict):
            raise RPCTransportError("RPC server returned malformed JSON")
        return body

    # Wallet engine operations ----------------------------------------------

    def init_mnemonic(self, passphrase: str, mnemonic: str | None) -> Any:
        params: list[Any] = [passphrase]
        if mnemonic is not None:
            params.append(mnemonic)
        return self.call("init", params)

    def list_addresses(self, account: str, page: int, per_page: int) -> Any:
        # page 0 is the latest page, served by the engine's own "list" method
        if page == 0:
            return self.call("list", [account, per_page])
        return self.call("listpage", [account, page, per_page])

    def generate_with_labels(self, account: str, labels: Sequence[str]) -> Any:
        return self.call("new", [account, list(labels)])

    def generate_addresses(self, account: str, count: int) -> Any:
        return self.call("genaddr", [account, count])

    def label_address(self, account: str, index: int, label: str) -> Any:
        return self.call("label", [account, index, label])

    def balance(self, account: str) -> Any:
        return self.call("balance", [account])

    def balances(self) -> Any:
        return self.call("balances")

    def list_transactions(self, account: str) -> Any:
        return self.call("tx", [account])

    def send(self, account: str, address: str, amount: int, fee: int) -> Any:
        return self.call("send", [account, address, amount, fee])

    def send_many(self, account: str, destinations: Sequence[tuple[str, int]], fee: int) -> Any:
        return self.call("sendmany", [account, [list(dest) for dest in destinations], fee])

    def new_account(self, name: str) -> Any:
        return self.call("newacc", [name])

    def new_multisig(self, name: str, m: int, n: int, keys: Sequence[XPubKey]) -> Any:
        return self.call("newms", [name, m, n, [key.to_string() for key in keys]])

    def add_keys(self, account: str, keys: Sequence[XPubKey]) -> Any:
        return self.call("addkeys", [account, [key.to_string() for key in keys]])

    def account_info(self, account: str) -> Any:
        return self.call("accinfo", [account])

    def list_accounts(self) -> Any:
        return self.call("listacc")

    def dump_keys(self, account: str) -> Any:
        return self.call("dumpkeys", [account])

    def dump_wif(self, account: str, index: int) -> Any:
        return self.call("wif", [account, index])

    def coins(self, account: str) -> Any:
        return self.call("coins", [account])

    def all_coins(self) -> Any:
        return self.call("allcoins")

    def sign_tx(self, account: str, tx: CTransaction, sighash: SigHash) -> Any:
        return self.call("signtx", [account, transaction_to_hex(tx), str(sighash)])

    def import_tx(self, tx: CTransaction) -> Any:
        return self.call("importtx", [transaction_to_hex(tx)])

    def remove_tx(self, txid: str) -> Any:
        return self.call("removetx", [txid])

    def decode_tx(self, raw_hex: str) -> Any:
        return self.call("decodetx", [raw_hex])

    def build_raw_tx(self, inputs_json: str, outputs_json: str) -> Any:
        return self.call("buildrawtx", [inputs_json, outputs_json])

    def sign_raw_tx(
        self, tx: CTransaction, sigdata_json: str, keys_json: str, sighash: SigHash
    ) -> Any:
        return self.call("signrawtx", [transaction_to_hex(tx), sigdata_json, keys_json, str(sighash)])
