import re
from collections.abc import Sequence
from typing import Any

from eth_abi import decode as eth_abi_decode
from eth_abi import encode as eth_abi_encode
from eth_abi.exceptions import (
    ABITypeError,
    DecodingError,
    EncodingError,
    ParseError,
    PredicateMappingError,
)
from eth_abi.grammar import ABIType, BasicType, TupleType, parse
from eth_utils import is_0x_prefixed, is_hexstr, to_bytes


class EncodingMismatch(Exception):
    """
    Raised when the given values do not match the types they are encoded with
    (number of values, tuple arity, or a value incompatible with its type).
    """


class UnsupportedType(Exception):
    """Raised when a signature contains a type the ABI codec does not recognize."""


class ABIDecodingError(Exception):
    """
    Raised on an error when decoding a value in an Eth ABI encoded bytestring.
    """


_WHITESPACE_RE = re.compile(r"\s+")


def canonical_form(signature: str) -> str:
    """
    Converts a signature with ``tuple(...)`` notation
    into the canonical form consumed by ``eth_abi``, e.g.
    ``tuple(address, uint256)[]`` becomes ``(address,uint256)[]``.
    """
    return _WHITESPACE_RE.sub("", signature).replace("tuple(", "(")


def _parse_type(signature: str) -> ABIType:
    try:
        return parse(canonical_form(signature))
    except ParseError as exc:
        raise UnsupportedType(f"Could not parse the type `{signature}`: {exc}") from exc


def _normalize_int(val: Any) -> Any:
    # JSON callers commonly quote large integers to avoid float precision loss.
    if isinstance(val, str):
        try:
            return int(val, 16) if is_0x_prefixed(val) else int(val, 10)
        except ValueError:
            return val
    return val


def _normalize_bytes(val: Any) -> Any:
    if isinstance(val, str) and is_0x_prefixed(val) and is_hexstr(val):
        return to_bytes(hexstr=val)
    return val


def _normalize(tp: ABIType, val: Any, path: str) -> Any:
    """
    Converts JSON literals into the values ``eth_abi`` expects for the type.
    Does not validate anything the codec validates itself.
    """
    if tp.is_array:
        if not isinstance(val, list | tuple):
            return val
        item_type = tp.item_type
        return [_normalize(item_type, item, f"{path}[{i}]") for i, item in enumerate(val)]

    if isinstance(tp, TupleType):
        if not isinstance(val, list | tuple):
            return val
        if len(val) != len(tp.components):
            raise EncodingMismatch(
                f"`{path}`: expected {len(tp.components)} tuple elements, got {len(val)}"
            )
        return tuple(
            _normalize(component, item, f"{path}.{i}")
            for i, (component, item) in enumerate(zip(tp.components, val, strict=True))
        )

    if isinstance(tp, BasicType):
        if tp.base in ("uint", "int"):
            return _normalize_int(val)
        if tp.base == "bytes":
            return _normalize_bytes(val)

    return val


def encode(signatures: Sequence[str], values: Sequence[Any]) -> bytes:
    """
    Encodes ``values`` in the contract ABI format,
    each value positionally aligned with the corresponding signature.
    """
    if not isinstance(values, list | tuple):
        raise EncodingMismatch(f"Expected a sequence of values, got {type(values).__name__}")
    if len(values) != len(signatures):
        raise EncodingMismatch(f"Expected {len(signatures)} values, got {len(values)}")

    types = [_parse_type(signature) for signature in signatures]
    normalized = [
        _normalize(tp, val, str(i)) for i, (tp, val) in enumerate(zip(types, values, strict=True))
    ]

    canonical_types = [canonical_form(signature) for signature in signatures]
    try:
        return eth_abi_encode(canonical_types, normalized)
    except (ABITypeError, PredicateMappingError) as exc:
        raise UnsupportedType(str(exc)) from exc
    except (EncodingError, TypeError) as exc:
        raise EncodingMismatch(str(exc)) from exc


def decode(signatures: Sequence[str], data: bytes) -> tuple[Any, ...]:
    """Decodes ABI encoded ``data`` into a tuple of values, one per signature."""
    canonical_types = [canonical_form(signature) for signature in signatures]
    try:
        return eth_abi_decode(canonical_types, data)
    except (ABITypeError, PredicateMappingError) as exc:
        raise UnsupportedType(str(exc)) from exc
    except DecodingError as exc:
        # wrap possible `eth_abi` errors
        message = (
            f"Could not decode the value "
            f"with the expected signatures {canonical_types}: {str(exc)}"
        )
        raise ABIDecodingError(message) from exc
