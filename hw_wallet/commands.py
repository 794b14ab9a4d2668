"""Command table and dispatch for ``hw``.

Every recognized command is one :class:`Command` entry pairing an argument
count contract with a handler.  Handlers decode their arguments, returning
the first decode failure unchanged, and otherwise describe exactly one
wallet engine call.  The engine is only needed once that call is run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from operator import methodcaller
from typing import Any, Callable, Sequence

from .decoder import decode_destinations, decode_integer, decode_keys, decode_transaction
from .engine import WalletEngine
from .options import Options
from .result import Err, Ok, Result, Stage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Arity:
    minimum: int
    maximum: int | None

    @classmethod
    def exactly(cls, n: int) -> "Arity":
        return cls(n, n)

    @classmethod
    def at_least(cls, n: int) -> "Arity":
        return cls(n, None)

    @classmethod
    def at_most(cls, n: int) -> "Arity":
        return cls(0, n)

    @classmethod
    def between(cls, low: int, high: int) -> "Arity":
        return cls(low, high)

    def accepts(self, count: int) -> bool:
        if count < self.minimum:
            return False
        return self.maximum is None or count <= self.maximum

    def describe(self) -> str:
        if self.maximum is None:
            return f"at least {self.minimum}"
        if self.minimum == self.maximum:
            return f"exactly {self.minimum}"
        if self.minimum == 0:
            return f"at most {self.maximum}"
        return f"between {self.minimum} and {self.maximum}"


Args = Sequence[str]
EngineCall = Callable[[WalletEngine], Any]
Handler = Callable[[Options, Args], Result[EngineCall]]


@dataclass(frozen=True)
class Command:
    name: str
    arity: Arity
    usage: str
    summary: str
    handler: Handler
    utility: bool = False


@dataclass(frozen=True)
class Invocation:
    command: str
    args: tuple[str, ...]

    @classmethod
    def from_tokens(cls, tokens: Sequence[str]) -> "Invocation | None":
        if not tokens:
            return None
        return cls(command=tokens[0], args=tuple(tokens[1:]))


def check_arity(command: Command, args: Args) -> Result[Args]:
    if command.arity.accepts(len(args)):
        return Ok(args)
    return Err(
        Stage.ARITY,
        f"Invalid number of arguments for {command.name}: expected "
        f"{command.arity.describe()}, got {len(args)}",
    )


# Handlers -------------------------------------------------------------------
#
# A handler decodes its arguments and returns the engine call to make; it
# never touches the engine itself.


def _init(opts: Options, args: Args) -> Result[EngineCall]:
    mnemonic = args[0] if args else None
    return Ok(methodcaller("init_mnemonic", opts.passphrase or "", mnemonic))


def _list(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("list_addresses", args[0], 0, opts.count))


def _listpage(opts: Options, args: Args) -> Result[EngineCall]:
    page = decode_integer(args[1], "page number")
    if isinstance(page, Err):
        return page
    return Ok(methodcaller("list_addresses", args[0], page.value, opts.count))


def _new(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("generate_with_labels", args[0], list(args[1:])))


def _genaddr(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("generate_addresses", args[0], opts.count))


def _label(opts: Options, args: Args) -> Result[EngineCall]:
    index = decode_integer(args[1], "address index")
    if isinstance(index, Err):
        return index
    return Ok(methodcaller("label_address", args[0], index.value, args[2]))


def _balance(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("balance", args[0]))


def _balances(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("balances"))


def _tx(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("list_transactions", args[0]))


def _send(opts: Options, args: Args) -> Result[EngineCall]:
    amount = decode_integer(args[2], "amount")
    if isinstance(amount, Err):
        return amount
    return Ok(methodcaller("send", args[0], args[1], amount.value, opts.fee))


def _sendmany(opts: Options, args: Args) -> Result[EngineCall]:
    destinations = decode_destinations(args[1:])
    if isinstance(destinations, Err):
        return destinations
    return Ok(methodcaller("send_many", args[0], destinations.value, opts.fee))


def _newacc(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("new_account", args[0]))


def _newms(opts: Options, args: Args) -> Result[EngineCall]:
    m = decode_integer(args[1], "M")
    if isinstance(m, Err):
        return m
    n = decode_integer(args[2], "N")
    if isinstance(n, Err):
        return n
    keys = decode_keys(args[3:])
    if isinstance(keys, Err):
        return keys
    return Ok(methodcaller("new_multisig", args[0], m.value, n.value, keys.value))


def _addkeys(opts: Options, args: Args) -> Result[EngineCall]:
    keys = decode_keys(args[1:])
    if isinstance(keys, Err):
        return keys
    return Ok(methodcaller("add_keys", args[0], keys.value))


def _accinfo(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("account_info", args[0]))


def _listacc(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("list_accounts"))


def _dumpkeys(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("dump_keys", args[0]))


def _wif(opts: Options, args: Args) -> Result[EngineCall]:
    index = decode_integer(args[1], "key index")
    if isinstance(index, Err):
        return index
    return Ok(methodcaller("dump_wif", args[0], index.value))


def _coins(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("coins", args[0]))


def _allcoins(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("all_coins"))


def _signtx(opts: Options, args: Args) -> Result[EngineCall]:
    tx = decode_transaction(args[1])
    if isinstance(tx, Err):
        return tx
    return Ok(methodcaller("sign_tx", args[0], tx.value, opts.sighash))


def _importtx(opts: Options, args: Args) -> Result[EngineCall]:
    tx = decode_transaction(args[0])
    if isinstance(tx, Err):
        return tx
    return Ok(methodcaller("import_tx", tx.value))


def _removetx(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("remove_tx", args[0]))


def _decodetx(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("decode_tx", args[0]))


def _buildrawtx(opts: Options, args: Args) -> Result[EngineCall]:
    return Ok(methodcaller("build_raw_tx", args[0], args[1]))


def _signrawtx(opts: Options, args: Args) -> Result[EngineCall]:
    tx = decode_transaction(args[0])
    if isinstance(tx, Err):
        return tx
    return Ok(methodcaller("sign_raw_tx", tx.value, args[1], args[2], opts.sighash))


_SIGDATA = '\'[{"txid":txid,"vout":n,"scriptPubKey":hex,"scriptRedeem":hex},...]\''

COMMANDS: dict[str, Command] = {
    command.name: command
    for command in (
        Command("init", Arity.at_most(1), "[mnemonic]", "Initialize a wallet", _init),
        Command("list", Arity.exactly(1), "acc", "Display last page of addresses", _list),
        Command(
            "listpage", Arity.exactly(2), "acc page [-c res/page]",
            "Display addresses by page", _listpage,
        ),
        Command("new", Arity.at_least(2), "acc {labels...}", "Generate address with labels", _new),
        Command("genaddr", Arity.exactly(1), "acc [-c count]", "Generate new addresses", _genaddr),
        Command("label", Arity.exactly(3), "acc index label", "Add a label to an address", _label),
        Command("balance", Arity.exactly(1), "acc", "Display account balance", _balance),
        Command("balances", Arity.exactly(0), "", "Display all balances", _balances),
        Command("tx", Arity.exactly(1), "acc", "Display transactions", _tx),
        Command("send", Arity.exactly(3), "acc addr amount", "Send coins to an address", _send),
        Command(
            "sendmany", Arity.at_least(2), "acc {addr:amount...}",
            "Send coins to many addresses", _sendmany,
        ),
        Command("newacc", Arity.exactly(1), "name", "Create a new account", _newacc),
        Command(
            "newms", Arity.at_least(3), "name M N [pubkey...]",
            "Create a new multisig account", _newms,
        ),
        Command(
            "addkeys", Arity.at_least(2), "acc {pubkey...}",
            "Add pubkeys to a multisig account", _addkeys,
        ),
        Command("accinfo", Arity.exactly(1), "acc", "Display account information", _accinfo),
        Command("listacc", Arity.exactly(0), "", "List all accounts", _listacc),
        Command("dumpkeys", Arity.exactly(1), "acc", "Dump account keys to stdout", _dumpkeys),
        Command("wif", Arity.exactly(2), "acc index", "Dump prvkey as WIF to stdout", _wif),
        Command("coins", Arity.exactly(1), "acc", "List coins", _coins),
        Command("allcoins", Arity.exactly(0), "", "List all coins per account", _allcoins),
        Command("signtx", Arity.exactly(2), "acc tx", "Sign a transaction", _signtx),
        Command("importtx", Arity.exactly(1), "tx", "Import transaction", _importtx),
        Command("removetx", Arity.exactly(1), "txid", "Remove transaction", _removetx),
        Command(
            "decodetx", Arity.exactly(1), "tx", "Decode HEX transaction", _decodetx, utility=True,
        ),
        Command(
            "buildrawtx", Arity.exactly(2),
            '\'[{"txid":txid,"vout":n},...]\' \'{addr:amnt,...}\'',
            "Build a raw transaction", _buildrawtx, utility=True,
        ),
        Command(
            "signrawtx", Arity.exactly(3), f"tx {_SIGDATA} '[prvkey,...]' [-s SigHash]",
            "Sign a raw transaction", _signrawtx, utility=True,
        ),
    )
}


def prepare(opts: Options, invocation: Invocation) -> Result[EngineCall]:
    """Route, count-check and decode ``invocation`` without needing an engine."""

    command = COMMANDS.get(invocation.command)
    if command is None:
        return Err(Stage.COMMAND, f"Invalid command: {invocation.command}")
    checked = check_arity(command, invocation.args)
    if isinstance(checked, Err):
        return checked
    logger.debug("Prepared %s with %d argument(s)", command.name, len(checked.value))
    return command.handler(opts, checked.value)


def dispatch(engine: WalletEngine, opts: Options, invocation: Invocation) -> Result[Any]:
    """Validate, decode and run ``invocation`` against ``engine``."""

    call = prepare(opts, invocation)
    if isinstance(call, Err):
        return call
    return Ok(call.value(engine))


def format_command_help() -> str:
    """Return the command listing shown beneath the option help."""

    lines = ["hw wallet commands:"]
    utility_lines = ["hw utility commands:"]
    for command in COMMANDS.values():
        if command.utility:
            utility_lines.append(f"  {command.name}")
            utility_lines.append(f"      {command.usage}")
            utility_lines.append(f"      {command.summary}")
        else:
            lines.append(f"  {command.name:<10} {command.usage:<24} {command.summary}")
    return "\n".join(lines + [""] + utility_lines)
