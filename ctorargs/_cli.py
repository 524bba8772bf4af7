"""Command-line entry point: print the ABI-encoded constructor arguments of a contract."""

import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from eth_utils import encode_hex

from . import __version__
from ._abi_types import ABI_JSON
from ._artifacts import ArtifactNotFound, compile_abi, load_abi
from ._codec import EncodingMismatch, UnsupportedType
from ._contract_abi import Constructor, MissingConstructor

logger = logging.getLogger(__name__)

ARTIFACTS_DIR_ENV = "CTORARGS_ARTIFACTS_DIR"
LOG_LEVEL_ENV = "CTORARGS_LOG_LEVEL"

DEFAULT_ARTIFACTS_DIR = "out"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class InvalidArguments(Exception):
    """Raised when the argument values string is not a JSON array."""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ctorargs",
        description="Print the ABI-encoded constructor arguments for a contract.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "contract",
        help=(
            "Contract name (`Name` or `File.sol:Name`), a path to an artifact JSON file, "
            "or a path to a Solidity source file to compile"
        ),
    )
    parser.add_argument(
        "args",
        nargs="?",
        default="[]",
        help="Constructor argument values as a JSON array (backslashes are ignored)",
    )
    parser.add_argument(
        "--artifacts-dir",
        default=os.environ.get(ARTIFACTS_DIR_ENV, DEFAULT_ARTIFACTS_DIR),
        help=f"Build artifacts directory (default: ${ARTIFACTS_DIR_ENV} or `out`)",
    )
    parser.add_argument(
        "--raw", action="store_true", help="Write raw bytes instead of a hex string"
    )
    parser.add_argument(
        "--types",
        action="store_true",
        help="Print the constructor type signatures as JSON instead of encoding",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL),
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging verbosity (logs go to stderr)",
    )
    return parser


def parse_values(args_json: str) -> list[Any]:
    """
    Parses the argument values given on the command line.
    Literal backslashes are stripped first, so shell-escaped quotes (``\\"``) are accepted.
    """
    try:
        values = json.loads(args_json.replace("\\", ""))
    except json.JSONDecodeError as exc:
        raise InvalidArguments(f"Could not parse the arguments as JSON: {exc}") from exc
    if not isinstance(values, list):
        raise InvalidArguments(
            f"The arguments must be a JSON array, got {type(values).__name__}"
        )
    return values


def resolve_abi(contract: str, artifacts_dir: str | Path) -> list[ABI_JSON]:
    """Compiles ``contract`` if it names a Solidity source, otherwise loads its artifact."""
    source, _, name = contract.partition(":")
    if source.endswith(".sol") and Path(source).is_file():
        return compile_abi(source, name or None)
    return load_abi(contract, artifacts_dir)


def run(contract: str, args_json: str, artifacts_dir: str | Path, *, types_only: bool) -> bytes:
    """Returns what the CLI writes to stdout."""
    abi = resolve_abi(contract, artifacts_dir)
    try:
        constructor = Constructor.from_abi(abi)
    except (KeyError, ValueError) as exc:
        raise ArtifactNotFound(f"Invalid ABI for `{contract}`: {exc}") from exc
    logger.info("Using %s", constructor)

    if types_only:
        return json.dumps(constructor.signatures).encode()

    values = parse_values(args_json)
    encoded = constructor.encode(values)
    logger.info("Encoded %d argument(s) into %d bytes", len(values), len(encoded))
    return encoded


def main(argv: None | Sequence[str] = None) -> int:
    parser = _build_parser()
    ns = parser.parse_args(argv)
    # argparse does not check defaults against `choices`
    if ns.log_level not in LOG_LEVELS:
        parser.error(
            f"invalid ${LOG_LEVEL_ENV} value: `{ns.log_level}` "
            f"(choose from {', '.join(LOG_LEVELS)})"
        )

    logging.basicConfig(
        level=ns.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        output = run(ns.contract, ns.args, ns.artifacts_dir, types_only=ns.types)
    except (
        ArtifactNotFound,
        MissingConstructor,
        EncodingMismatch,
        UnsupportedType,
        InvalidArguments,
    ) as exc:
        logger.debug("Encoding failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if ns.types or ns.raw:
        sys.stdout.buffer.write(output)
    else:
        sys.stdout.write(encode_hex(output))
    sys.stdout.flush()
    return 0
