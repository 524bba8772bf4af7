import json
import logging
from collections.abc import Mapping
from pathlib import Path

import solcx
from solcx.exceptions import SolcError, SolcNotInstalled

from ._abi_types import ABI_JSON

logger = logging.getLogger(__name__)


class ArtifactNotFound(Exception):
    """Raised when a contract's ABI could not be located, read, or compiled."""


def artifact_path(contract: str, artifacts_dir: str | Path) -> Path:
    """
    Returns the artifact path for a contract identifier.

    ``Name`` maps to ``<artifacts_dir>/Name.sol/Name.json``
    (the layout of both Foundry's ``out`` and Hardhat's ``artifacts/contracts``),
    ``File.sol:Name`` maps to ``<artifacts_dir>/File.sol/Name.json``,
    and an existing ``.json`` file is used as is.
    """
    as_path = Path(contract)
    if as_path.suffix == ".json" and as_path.is_file():
        return as_path

    if ":" in contract:
        source_name, contract_name = contract.rsplit(":", 1)
    else:
        source_name, contract_name = contract + ".sol", contract

    return Path(artifacts_dir) / source_name / (contract_name + ".json")


def _abi_from_artifact(artifact: ABI_JSON, path: Path) -> list[ABI_JSON]:
    # Artifacts wrap the ABI in an object, plain ABI dumps are just the list.
    if isinstance(artifact, Mapping):
        artifact = artifact.get("abi")
    if not isinstance(artifact, list):
        raise ArtifactNotFound(f"No ABI found in {path}")
    return artifact


def load_abi(contract: str, artifacts_dir: str | Path = "out") -> list[ABI_JSON]:
    """
    Loads the ABI of the given contract from its build artifact
    (see :py:func:`artifact_path` for the path resolution rules).
    """
    path = artifact_path(contract, artifacts_dir)
    logger.debug("Loading the artifact for `%s` from %s", contract, path)

    try:
        artifact = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ArtifactNotFound(f"Artifact file not found: {path}") from exc
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ArtifactNotFound(f"Could not read the artifact {path}: {exc}") from exc

    abi = _abi_from_artifact(artifact, path)
    logger.debug("Loaded %d ABI entries from %s", len(abi), path)
    return abi


def compile_abi(
    path: str | Path,
    contract_name: None | str = None,
    *,
    import_remappings: Mapping[str, str | Path] = {},
) -> list[ABI_JSON]:
    """
    Compiles the Solidity file at the given ``path`` and returns the ABI of ``contract_name``.
    If ``contract_name`` is not given, it defaults to the file's stem.
    """
    path = Path(path).resolve()
    if contract_name is None:
        contract_name = path.stem

    logger.info("Compiling %s", path)
    try:
        compiled = solcx.compile_files(
            [path],
            output_values=["abi"],
            import_remappings={key: str(value) for key, value in import_remappings.items()},
        )
    except (SolcError, SolcNotInstalled) as exc:
        raise ArtifactNotFound(f"Could not compile {path}: {exc}") from exc

    for identifier, compiled_contract in compiled.items():
        # When `.sol` files are imported, all contracts are added to the flat namespace,
        # so the names are guaranteed to be unique.
        _source, name = identifier.rsplit(":", 1)
        if name == contract_name:
            return _abi_from_artifact(compiled_contract, path)

    available = ", ".join(sorted(identifier.rsplit(":", 1)[1] for identifier in compiled))
    raise ArtifactNotFound(
        f"Contract `{contract_name}` not found in {path}. Available contracts: {available}"
    )
