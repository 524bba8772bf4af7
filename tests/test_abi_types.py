import pytest

from ctorargs import Primitive, Tuple, TupleArray, dispatch_param, dispatch_params


def test_primitive():
    assert dispatch_param(dict(name="a", type="uint256")) == Primitive("uint256")
    assert dispatch_param(dict(name="a", type="uint256")).signature == "uint256"
    assert dispatch_param(dict(name="a", type="address")).name == "a"
    assert Primitive("uint8") != Primitive("uint16")


def test_primitive_arrays_are_opaque():
    # Arrays of non-tuple types are not decomposed
    for type_str in ["uint256[]", "address[3]", "bytes32[][2]", "string[]"]:
        param = dispatch_param(dict(name="x", type=type_str))
        assert param == Primitive(type_str)
        assert param.signature == type_str


def test_tuple():
    param = dispatch_param(
        dict(
            name="s",
            type="tuple",
            components=[dict(name="a", type="address"), dict(name="b", type="uint256")],
        )
    )
    assert param == Tuple([Primitive("address"), Primitive("uint256")])
    assert param.signature == "tuple(address, uint256)"
    assert str(param) == "tuple(address, uint256)"
    assert repr(param) == "Tuple('tuple(address, uint256)')"


def test_empty_tuple():
    assert dispatch_param(dict(name="s", type="tuple", components=[])).signature == "tuple()"


def test_tuple_array():
    param = dispatch_param(
        dict(name="s", type="tuple[]", components=[dict(name="a", type="uint256")])
    )
    assert param == TupleArray([Primitive("uint256")])
    assert param.signature == "tuple(uint256)[]"

    # A tuple array is not equal to a tuple with the same components
    assert param != Tuple([Primitive("uint256")])
    assert Tuple([Primitive("uint256")]) != param


def test_tuple_array_suffixes():
    components = [dict(name="a", type="bool"), dict(name="b", type="uint256[]")]
    assert (
        dispatch_param(dict(name="s", type="tuple[2]", components=components)).signature
        == "tuple(bool, uint256[])[2]"
    )
    assert (
        dispatch_param(dict(name="s", type="tuple[][3]", components=components)).signature
        == "tuple(bool, uint256[])[][3]"
    )
    assert TupleArray([Primitive("bool")], suffix="[2]") != TupleArray([Primitive("bool")])


def test_nested_tuples():
    param = dispatch_param(
        dict(
            name="outer",
            type="tuple",
            components=[
                dict(name="a", type="uint8"),
                dict(
                    name="inner",
                    type="tuple[]",
                    components=[
                        dict(name="b", type="string"),
                        dict(
                            name="innermost",
                            type="tuple",
                            components=[dict(name="c", type="bytes32")],
                        ),
                    ],
                ),
            ],
        )
    )
    assert param.signature == "tuple(uint8, tuple(string, tuple(bytes32))[])"


def test_deep_nesting():
    entry = dict(name="leaf", type="uint256")
    for _ in range(50):
        entry = dict(name="level", type="tuple", components=[entry])
    assert dispatch_param(entry).signature == "tuple(" * 50 + "uint256" + ")" * 50


def test_dispatch_params_preserves_order():
    params = dispatch_params(
        [
            dict(name="param2", type="uint8"),
            dict(name="param1", type="uint16[2]"),
            dict(name="param3", type="tuple", components=[dict(name="a", type="bool")]),
        ]
    )
    assert [param.name for param in params] == ["param2", "param1", "param3"]
    assert [param.signature for param in params] == ["uint8", "uint16[2]", "tuple(bool)"]


def test_dispatch_errors():
    with pytest.raises(ValueError, match="Parameter `s` of type `tuple` must have `components`"):
        dispatch_param(dict(name="s", type="tuple"))

    with pytest.raises(ValueError, match="Parameter type must be a string, got int"):
        dispatch_param(dict(name="s", type=1))

    with pytest.raises(KeyError):
        dispatch_param(dict(name="s"))
