"""Deploy a contract and run a single function on it."""
from typing import Any, NamedTuple, Optional, Tuple

from chainlotto.config import cl_print
from chainlotto.transaction.interface import ContractClientInterface
from chainlotto.transaction.types import is_read_only


class RunFunctionParams(NamedTuple):
    contract_name: str = 'Foo'
    function: str = 'foo'
    args: Tuple = ()
    wei_amount: Optional[int] = None


def run(client: ContractClientInterface, params: RunFunctionParams = RunFunctionParams()) -> Any:
    """
    Deploy params.contract_name and run params.function on the new instance.

    View and pure functions are called, everything else is issued as a transaction.

    :return: the return value of a call, or the receipt of a transaction
    """
    contract = client.deploy(params.contract_name)
    cl_print('X')
    if is_read_only(contract.get_function_abi(params.function)):
        result = client.call(contract, params.function, params.args, wei_amount=params.wei_amount)
        cl_print(f'Result: {result}')
    else:
        result = client.transact(contract, params.function, params.args, wei_amount=params.wei_amount)
    cl_print('Y')
    return result
