from typing import Any

import pytest

ADDRESS = "0x95222290DD7278Aa3Ddd389Cc1E1d165CC4BAfe5"


def param(name: str, type_: str, components: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    entry: dict[str, Any] = dict(name=name, type=type_, internalType=type_)
    if components is not None:
        entry["components"] = components
    return entry


def nested_struct_inputs() -> list[dict[str, Any]]:
    struct_c = param("structC", "tuple", [param("c", "string"), param("d", "uint256")])
    struct_b = param("structB", "tuple", [param("c", "bytes"), param("d", "uint256"), struct_c])
    struct_a = param(
        "simpleStruct", "tuple", [param("a", "address"), param("b", "uint256"), struct_b]
    )
    return [struct_a, param("a", "uint256"), param("b", "uint256")]


@pytest.fixture
def nested_abi() -> list[dict[str, Any]]:
    """
    A constructor and a function with the same nested struct inputs.
    """
    return [
        dict(type="constructor", stateMutability="nonpayable", inputs=nested_struct_inputs()),
        dict(
            type="function",
            name="encode",
            stateMutability="pure",
            inputs=nested_struct_inputs(),
            outputs=[param("", "bytes")],
        ),
    ]


@pytest.fixture
def nested_values() -> list[Any]:
    return [[ADDRESS, 2, [ADDRESS, 2, [ADDRESS, 2]]], 2, 3]


@pytest.fixture
def address() -> str:
    return ADDRESS
