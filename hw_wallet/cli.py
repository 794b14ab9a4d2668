"""Command line entry point for ``hw``.

An invocation runs strictly in order: option parsing, argument count check,
argument decoding, a single wallet engine call, and result rendering.  The
first failing stage ends the process with a logged error and no output.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Callable, Sequence

from . import __version__
from .commands import Invocation, format_command_help, prepare
from .config import ConfigurationError
from .engine import WalletEngine, WalletEngineError
from .options import build_parser, parse_options
from .result import Err, Ok, Stage
from .rpc_client import WalletRPCClient
from .serializer import render_result

logging.basicConfig(
    level=getattr(logging, os.environ.get("HW_LOG_LEVEL", "WARNING").upper(), logging.WARNING)
)
logger = logging.getLogger(__name__)

WARNING_MSG = "*** This software is experimental. Use only small amounts of Bitcoins ***"
VERSION_MSG = f"hw wallet version {__version__}"

EXIT_COMMAND_ERROR = 1
EXIT_USAGE_ERROR = 2


def usage() -> str:
    parser = build_parser(epilog=format_command_help())
    return f"{WARNING_MSG}\n{parser.format_help()}"


def main(
    argv: Sequence[str] | None = None,
    engine_factory: Callable[[], WalletEngine] = WalletRPCClient.from_env,
) -> None:
    parsed = parse_options(sys.argv[1:] if argv is None else argv)
    if isinstance(parsed, Err):
        sys.stderr.write(f"{parsed.message}\n{usage()}")
        sys.exit(EXIT_USAGE_ERROR)
    opts, tokens = parsed.value

    # -h and -v never need a command
    if opts.help:
        print(usage())
        return
    if opts.version:
        print(VERSION_MSG)
        return
    invocation = Invocation.from_tokens(tokens)
    if invocation is None:
        print(usage())
        return

    # routing, arity and decoding fail before any engine or config is touched
    call = prepare(opts, invocation)
    if isinstance(call, Err):
        logger.error("%s", call)
        sys.exit(EXIT_COMMAND_ERROR)

    try:
        outcome = Ok(call.value(engine_factory()))
    except KeyboardInterrupt:  # pragma: no cover - interactive use
        logger.info("Interrupted by user")
        sys.exit(EXIT_COMMAND_ERROR)
    except ConfigurationError as exc:
        logger.error("configuration error: %s", exc)
        sys.exit(EXIT_COMMAND_ERROR)
    except WalletEngineError as exc:
        outcome = Err(Stage.WALLET, str(exc))

    if isinstance(outcome, Err):
        logger.error("%s", outcome)
        sys.exit(EXIT_COMMAND_ERROR)

    text = render_result(outcome.value, opts.output_format)
    if text is not None:
        print(text)


if __name__ == "__main__":
    main(sys.argv[1:])
