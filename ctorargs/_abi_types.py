import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from functools import cached_property
from typing import Any

# Loosely typed JSON, as it comes from an artifact or a compiler.
ABI_JSON = None | bool | int | float | str | Sequence["ABI_JSON"] | Mapping[str, "ABI_JSON"]

_TUPLE_RE = re.compile(r"^tuple((?:\[\d*\])*)$")


class Param(ABC):
    """A constructor parameter or a tuple component."""

    name: str
    """Parameter name (informational only)."""

    @property
    @abstractmethod
    def signature(self) -> str:
        """
        Returns the parameter type as a signature string,
        with tuples written as ``tuple(<component signatures>)``.
        """
        ...

    def __str__(self) -> str:
        return self.signature

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.signature!r})"


class Primitive(Param):
    """
    A non-tuple type, including arrays of non-tuple types (e.g. ``uint256[]``),
    which are kept as opaque type names.
    """

    def __init__(self, type_name: str, name: str = ""):
        self.type_name = type_name
        self.name = name

    @property
    def signature(self) -> str:
        return self.type_name

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Primitive) and self.type_name == other.type_name


class Tuple(Param):
    """Corresponds to the ABI ``tuple`` type (a Solidity struct)."""

    def __init__(self, components: Iterable[Param], name: str = ""):
        self.components = tuple(components)
        self.name = name

    @cached_property
    def signature(self) -> str:
        return "tuple(" + join_signatures(self.components) + ")"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Tuple)
            and not isinstance(other, TupleArray)
            and self.components == other.components
        )


class TupleArray(Tuple):
    """
    Corresponds to an array of tuples, ``tuple[]``.
    Fixed-size and multi-dimensional arrays keep their full suffix (e.g. ``[2]``, ``[][3]``).
    """

    def __init__(self, components: Iterable[Param], name: str = "", suffix: str = "[]"):
        super().__init__(components, name=name)
        self.suffix = suffix

    @cached_property
    def signature(self) -> str:
        return "tuple(" + join_signatures(self.components) + ")" + self.suffix

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, TupleArray)
            and self.components == other.components
            and self.suffix == other.suffix
        )


def signatures(params: Iterable[Param]) -> list[str]:
    """Returns one signature per parameter, in order."""
    return [param.signature for param in params]


def join_signatures(params: Iterable[Param]) -> str:
    """Returns the signatures of the tuple components as a single sub-expression."""
    return ", ".join(signatures(params))


def dispatch_param(abi_entry: Mapping[str, Any]) -> Param:
    """Builds a parameter tree from a JSON ABI parameter entry."""
    type_str = abi_entry["type"]
    if not isinstance(type_str, str):
        raise ValueError(f"Parameter type must be a string, got {type(type_str).__name__}")

    name = abi_entry.get("name") or ""

    match = _TUPLE_RE.match(type_str)
    if not match:
        # Anything that is not a tuple is passed through verbatim,
        # there is nothing to recurse into.
        return Primitive(type_str, name=name)

    if "components" not in abi_entry:
        raise ValueError(f"Parameter `{name}` of type `{type_str}` must have `components`")
    components = dispatch_params(abi_entry["components"])

    suffix = match.group(1)
    if suffix:
        return TupleArray(components, name=name, suffix=suffix)
    return Tuple(components, name=name)


def dispatch_params(abi_entries: Iterable[Mapping[str, Any]]) -> list[Param]:
    return [dispatch_param(entry) for entry in abi_entries]
