"""Command dispatch and validation layer for the ``hw`` wallet CLI."""

__version__ = "0.0.1"

from .commands import COMMANDS, Arity, Command, Invocation, check_arity, dispatch, prepare
from .decoder import decode_destinations, decode_integer, decode_keys, decode_transaction
from .engine import WalletEngine, WalletEngineError
from .keys import KeyFormatError, XPubKey
from .options import DEFAULT_OPTIONS, Options, SigHash, SigHashType, parse_options
from .result import Err, Ok, Result, Stage
from .serializer import OutputFormat, render_result
from .tx import TransactionFormatError, transaction_from_hex, transaction_id, transaction_to_hex

__all__ = [
    "__version__",
    "COMMANDS",
    "Arity",
    "Command",
    "Invocation",
    "check_arity",
    "dispatch",
    "prepare",
    "decode_destinations",
    "decode_integer",
    "decode_keys",
    "decode_transaction",
    "WalletEngine",
    "WalletEngineError",
    "KeyFormatError",
    "XPubKey",
    "DEFAULT_OPTIONS",
    "Options",
    "SigHash",
    "SigHashType",
    "parse_options",
    "Err",
    "Ok",
    "Result",
    "Stage",
    "OutputFormat",
    "render_result",
    "TransactionFormatError",
    "transaction_from_hex",
    "transaction_id",
    "transaction_to_hex",
]
