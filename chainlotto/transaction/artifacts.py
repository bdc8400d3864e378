"""
Resolution of contract interface descriptors (abi + bytecode) by contract name.

Descriptors either come from hardhat artifact files (if cfg.artifacts_dir is set) or from compiling the
solidity sources in cfg.contracts_dir.
"""
import glob
import json
import os
from typing import Dict, Optional, Tuple

from chainlotto import my_logging
from chainlotto.compiler.solidity.compiler import compile_contract
from chainlotto.config import cfg, cl_print
from chainlotto.errors.exceptions import InterfaceResolutionError, SolcException
from chainlotto.utils.helpers import get_contract_names

_interface_cache: Dict[Tuple[str, str, str], Dict] = {}


def clear_interface_cache():
    _interface_cache.clear()


def find_contract_source(contract_name: str, contracts_dir: Optional[str] = None) -> str:
    """
    Return the path of the .sol file in contracts_dir (searched recursively) which declares contract_name.

    :raise InterfaceResolutionError: if no such file exists
    """
    contracts_dir = cfg.contracts_dir if contracts_dir is None else contracts_dir
    if not os.path.isdir(contracts_dir):
        raise InterfaceResolutionError(f'Contracts directory "{contracts_dir}" does not exist')

    preferred = os.path.join(contracts_dir, f'{contract_name}.sol')
    candidates = [preferred] if os.path.exists(preferred) else []
    candidates += sorted(glob.glob(os.path.join(contracts_dir, '**', '*.sol'), recursive=True))
    for sol_file in candidates:
        if contract_name in get_contract_names(sol_file):
            return sol_file
    raise InterfaceResolutionError(f'No solidity file in "{contracts_dir}" declares contract {contract_name}')


def load_hardhat_artifact(contract_name: str, artifacts_dir: str) -> Dict:
    """
    Load abi and bytecode of contract_name from a hardhat artifacts directory.

    Hardhat stores artifacts as <artifacts_dir>/contracts/<File>.sol/<ContractName>.json,
    debug files (*.dbg.json) are ignored.

    :raise InterfaceResolutionError: if there is no (valid) artifact for contract_name
    """
    matches = glob.glob(os.path.join(artifacts_dir, '**', f'{contract_name}.json'), recursive=True)
    if not matches:
        raise InterfaceResolutionError(f'No artifact for contract {contract_name} in "{artifacts_dir}"')
    artifact_file = sorted(matches)[0]

    try:
        with open(artifact_file) as f:
            artifact = json.load(f)
        abi = artifact['abi']
    except (OSError, ValueError, KeyError) as e:
        raise InterfaceResolutionError(f'Invalid artifact file "{artifact_file}": {e}') from e

    return {
        'abi': abi,
        'bin': artifact.get('bytecode', ''),
        'deployed_bin': artifact.get('deployedBytecode', '')
    }


def resolve_contract_interface(contract_name: str) -> Dict:
    """
    Return the interface descriptor of contract_name.

    :param contract_name: name of the contract (as declared in solidity)
    :raise InterfaceResolutionError: if no artifact/source declares the contract or compilation fails
    :return: dict with keys 'abi', 'bin' and 'deployed_bin'
    """
    key = (contract_name, cfg.artifacts_dir, cfg.contracts_dir)
    if key in _interface_cache:
        return _interface_cache[key]

    if cfg.artifacts_dir:
        interface = load_hardhat_artifact(contract_name, cfg.artifacts_dir)
        my_logging.debug(f'Loaded interface of {contract_name} from hardhat artifacts')
    else:
        sol_file = find_contract_source(contract_name)
        cl_print(f'Compiling {os.path.basename(sol_file)}:{contract_name}', verbosity_level=2)
        try:
            interface = compile_contract(sol_file, contract_name)
        except (SolcException, ValueError) as e:
            raise InterfaceResolutionError(f'Failed to compile {contract_name}\n{e}') from e

    _interface_cache[key] = interface
    return interface
