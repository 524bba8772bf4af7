"""ABI encoding of contract constructor arguments."""

__version__ = "0.1.0"

from ._abi_types import (  # noqa: E402
    ABI_JSON,
    Param,
    Primitive,
    Tuple,
    TupleArray,
    dispatch_param,
    dispatch_params,
)
from ._artifacts import ArtifactNotFound, artifact_path, compile_abi, load_abi  # noqa: E402
from ._codec import (  # noqa: E402
    ABIDecodingError,
    EncodingMismatch,
    UnsupportedType,
    canonical_form,
    decode,
    encode,
)
from ._contract_abi import (  # noqa: E402
    Constructor,
    MissingConstructor,
    encode_constructor_args,
    find_constructor,
    generate_type_array,
)

__all__ = [
    "ABI_JSON",
    "ABIDecodingError",
    "ArtifactNotFound",
    "Constructor",
    "EncodingMismatch",
    "MissingConstructor",
    "Param",
    "Primitive",
    "Tuple",
    "TupleArray",
    "UnsupportedType",
    "artifact_path",
    "canonical_form",
    "compile_abi",
    "decode",
    "dispatch_param",
    "dispatch_params",
    "encode",
    "encode_constructor_args",
    "find_constructor",
    "generate_type_array",
    "load_abi",
]
