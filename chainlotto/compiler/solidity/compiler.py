import json
import pathlib
from typing import Dict, Tuple

from solcx import compile_standard
from solcx.exceptions import SolcError

from chainlotto import my_logging
from chainlotto.config import cfg
from chainlotto.errors.exceptions import SolcException


def compile_solidity_json(sol_filename: str, optimizer_runs: int = -1,
                          output_selection: Tuple = ('abi', 'evm.bytecode', 'evm.deployedBytecode')) -> Dict:
    """
    Compile the given solidity file using solc json interface with the provided options.

    :param sol_filename: path to solidity file
    :param optimizer_runs: controls the optimize-runs flag, negative values disable the optimizer
    :param output_selection: determines which fields are included in the compiler output dict
    :raise SolcException: if solc reports an error or no compatible solc binary is available
    :return: dictionary with the compilation results according to output_selection
    """
    solp = pathlib.Path(sol_filename)
    json_in = {
        'language': 'Solidity',
        'sources': {
            solp.name: {
                'urls': [
                    str(solp.absolute())
                ]
            }
        },
        'settings': {
            'evmVersion': cfg.evm_version,
            'outputSelection': {
                '*': {'*': list(output_selection)}
            },
        }
    }

    if optimizer_runs >= 0:
        json_in['settings']['optimizer'] = {
            'enabled': True,
            'runs': optimizer_runs
        }

    solc_version = cfg.concrete_solc_version
    my_logging.debug(f'Compiling {solp.name} with solc {solc_version}')
    try:
        return compile_standard(json_in, allow_paths=str(solp.absolute().parent), solc_version=solc_version)
    except SolcError as e:
        raise SolcException(_format_errors(e)) from e


def _format_errors(e: SolcError) -> str:
    try:
        errors = json.loads(e.stdout_data)['errors']
    except (ValueError, KeyError, TypeError):
        return str(e)
    return '\n'.join(err.get('formattedMessage', err['message']) for err in errors if err['severity'] == 'error')


def compile_contract(sol_filename: str, contract_name: str) -> Dict:
    """
    Compile sol_filename and return the interface of contract_name.

    :return: dict with keys 'abi', 'bin' (creation bytecode) and 'deployed_bin' (runtime bytecode)
    """
    solp = pathlib.Path(sol_filename)
    out = compile_solidity_json(sol_filename, optimizer_runs=cfg.opt_solc_optimizer_runs)
    try:
        jout = out['contracts'][solp.name][contract_name]
    except KeyError:
        raise SolcException(f'Contract {contract_name} not found in {solp.name}')
    return {
        'abi': jout['abi'],
        'bin': jout['evm']['bytecode']['object'],
        'deployed_bin': jout['evm']['deployedBytecode']['object']
    }
