"""Global command-line options for ``hw``.

Each flag occurrence queues a transformer; the queue is folded left to right
over :data:`DEFAULT_OPTIONS` so that the resulting :class:`Options` record is
never mutated after it has been built.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
from enum import Enum
from functools import reduce
from typing import Callable, Sequence

from .decoder import parse_decimal
from .result import Err, Ok, Result, Stage
from .serializer import OutputFormat

USAGE_HEADER = "hw [<options>] <command> [<args>]"


class SigHashType(Enum):
    ALL = 0x01
    NONE = 0x02
    SINGLE = 0x03


ANYONECANPAY_FLAG = 0x80


@dataclass(frozen=True)
class SigHash:
    kind: SigHashType = SigHashType.ALL
    anyone_can_pay: bool = False

    @property
    def value(self) -> int:
        return self.kind.value | (ANYONECANPAY_FLAG if self.anyone_can_pay else 0)

    def __str__(self) -> str:
        return self.kind.name + ("|ANYONECANPAY" if self.anyone_can_pay else "")


@dataclass(frozen=True)
class Options:
    count: int = 5
    sighash: SigHash = SigHash()
    fee: int = 10000
    output_format: OutputFormat = OutputFormat.YAML
    help: bool = False
    version: bool = False
    passphrase: str | None = None


DEFAULT_OPTIONS = Options()

Transform = Callable[[Options], Options]


class OptionError(ValueError):
    """Raised by the argument parser instead of exiting the process."""


def _parse_count(raw: str) -> int:
    try:
        value = parse_decimal(raw)
    except ValueError:
        value = 0
    if value <= 0:
        raise argparse.ArgumentTypeError(f"Invalid count option: {raw}")
    return value


def _parse_fee(raw: str) -> int:
    try:
        value = parse_decimal(raw)
    except ValueError:
        value = -1
    if value < 0:
        raise argparse.ArgumentTypeError(f"Invalid fee option: {raw}")
    return value


def _parse_sighash_type(raw: str) -> SigHashType:
    if raw not in SigHashType.__members__:
        raise argparse.ArgumentTypeError("SigHash must be one of ALL|NONE|SINGLE")
    return SigHashType[raw]


def set_count(count: int) -> Transform:
    return lambda opts: replace(opts, count=count)


def set_fee(fee: int) -> Transform:
    return lambda opts: replace(opts, fee=fee)


def set_sighash_type(kind: SigHashType) -> Transform:
    return lambda opts: replace(opts, sighash=replace(opts.sighash, kind=kind))


def set_anyone_can_pay(opts: Options) -> Options:
    return replace(opts, sighash=replace(opts.sighash, anyone_can_pay=True))


def set_json(opts: Options) -> Options:
    return replace(opts, output_format=OutputFormat.JSON)


def set_help(opts: Options) -> Options:
    return replace(opts, help=True)


def set_version(opts: Options) -> Options:
    return replace(opts, version=True)


def set_passphrase(passphrase: str) -> Transform:
    return lambda opts: replace(opts, passphrase=passphrase)


class _QueueTransform(argparse.Action):
    """Append a configuration transformer rather than storing the value."""

    def __init__(self, option_strings, dest, transform, **kwargs) -> None:
        self.transform = transform
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        queued = list(getattr(namespace, self.dest))
        queued.append(self.transform if self.nargs == 0 else self.transform(values))
        setattr(namespace, self.dest, queued)


class OptionParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise OptionError(message)


def build_parser(epilog: str | None = None) -> OptionParser:
    parser = OptionParser(
        prog="hw",
        usage=USAGE_HEADER,
        add_help=False,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.set_defaults(transforms=())
    parser.add_argument(
        "-c", "--count", action=_QueueTransform, transform=set_count, type=_parse_count,
        dest="transforms", metavar="INT", help="Count: see commands for details",
    )
    parser.add_argument(
        "-s", "--sighash", action=_QueueTransform, transform=set_sighash_type,
        type=_parse_sighash_type, dest="transforms", metavar="SIGHASH",
        help="Signature type = ALL|NONE|SINGLE",
    )
    parser.add_argument(
        "-a", "--anyonecanpay", action=_QueueTransform, transform=set_anyone_can_pay,
        nargs=0, dest="transforms", help="Set signature flag AnyoneCanPay",
    )
    parser.add_argument(
        "-f", "--fee", action=_QueueTransform, transform=set_fee, type=_parse_fee,
        dest="transforms", metavar="INT", help="Transaction fee (default: 10000)",
    )
    parser.add_argument(
        "-j", "--json", action=_QueueTransform, transform=set_json, nargs=0,
        dest="transforms", help="Format result as JSON (default: YAML)",
    )
    parser.add_argument(
        "-h", "--help", action=_QueueTransform, transform=set_help, nargs=0,
        dest="transforms", help="Display this help message",
    )
    parser.add_argument(
        "-v", "--version", action=_QueueTransform, transform=set_version, nargs=0,
        dest="transforms", help="Show version information",
    )
    parser.add_argument(
        "-p", "--passphrase", action=_QueueTransform, transform=set_passphrase,
        dest="transforms", metavar="PASSPHRASE", help="Optional passphrase for mnemonic",
    )
    parser.add_argument("tokens", nargs="*", help=argparse.SUPPRESS)
    return parser


def fold_options(transforms: Sequence[Transform], initial: Options = DEFAULT_OPTIONS) -> Options:
    return reduce(lambda opts, transform: transform(opts), transforms, initial)


def parse_options(argv: Sequence[str]) -> Result[tuple[Options, list[str]]]:
    """Split ``argv`` into folded options and the residual positional tokens."""

    try:
        namespace = build_parser().parse_intermixed_args(list(argv))
    except OptionError as exc:
        return Err(Stage.OPTION, str(exc))
    return Ok((fold_options(namespace.transforms), list(namespace.tokens)))
