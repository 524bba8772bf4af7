from collections.abc import Iterable, Mapping, Sequence
from functools import cached_property
from typing import Any, cast

from ._abi_types import ABI_JSON, Param, dispatch_params, signatures
from ._codec import encode


class MissingConstructor(Exception):
    """Raised when a contract ABI does not declare a constructor."""


def find_constructor(abi: Iterable[ABI_JSON]) -> Mapping[str, ABI_JSON]:
    """Returns the first ABI entry with ``type == "constructor"``."""
    for entry in abi:
        if isinstance(entry, Mapping) and entry.get("type") == "constructor":
            return cast("Mapping[str, ABI_JSON]", entry)
    raise MissingConstructor("Constructor not found in ABI")


class Constructor:
    """
    Contract constructor.
    """

    inputs: tuple[Param, ...]
    """Input parameters."""

    payable: bool
    """Whether this constructor is marked as payable"""

    @classmethod
    def from_json(cls, method_entry: ABI_JSON) -> "Constructor":
        """Creates this object from a JSON ABI constructor entry."""
        method_entry_typed = cast("Mapping[str, Any]", method_entry)

        if method_entry_typed["type"] != "constructor":
            raise ValueError(
                "Constructor object must be created from a JSON entry with type='constructor'"
            )
        inputs = dispatch_params(method_entry_typed.get("inputs", []))
        # Old compilers emit `payable` instead of `stateMutability`.
        state_mutability = method_entry_typed.get("stateMutability")
        if state_mutability is None:
            payable = bool(method_entry_typed.get("payable", False))
        else:
            payable = state_mutability == "payable"
        return cls(inputs, payable=payable)

    @classmethod
    def from_abi(cls, abi: Iterable[ABI_JSON]) -> "Constructor":
        """
        Creates this object from the constructor entry of a contract ABI.
        Raises :py:class:`MissingConstructor` if there is none.
        """
        return cls.from_json(find_constructor(abi))

    def __init__(self, inputs: Sequence[Param], *, payable: bool = False):
        self.inputs = tuple(inputs)
        self.payable = payable

    @cached_property
    def signatures(self) -> list[str]:
        """One type signature per input, in declaration order."""
        return signatures(self.inputs)

    def encode(self, values: Sequence[Any]) -> bytes:
        """Returns the constructor arguments encoded in the contract ABI format."""
        return encode(self.signatures, values)

    def __str__(self) -> str:
        params = ", ".join(
            param.signature + ((" " + param.name) if param.name else "") for param in self.inputs
        )
        return f"constructor({params}) " + ("payable" if self.payable else "nonpayable")


def generate_type_array(abi: Iterable[ABI_JSON]) -> list[str]:
    """
    Returns the type signatures of the constructor inputs declared in ``abi``,
    one per input, with tuples written as ``tuple(...)``.
    """
    return Constructor.from_abi(abi).signatures


def encode_constructor_args(abi: Iterable[ABI_JSON], values: Sequence[Any]) -> bytes:
    """Encodes ``values`` as the arguments of the constructor declared in ``abi``."""
    return Constructor.from_abi(abi).encode(values)
