"""Deploy a Lottery, store a value and read it back."""
from typing import NamedTuple

from chainlotto.config import cl_print
from chainlotto.transaction.interface import ContractClientInterface


class ChangeValueParams(NamedTuple):
    contract_name: str = 'Lottery'
    value: int = 777


def run(client: ContractClientInterface, params: ChangeValueParams = ChangeValueParams()) -> int:
    deployed = client.deploy(params.contract_name)
    cl_print(f'Lottery deployed at: {deployed.address}')

    # Interact through a fresh handle, like a separate script would
    lottery = client.attach(params.contract_name, deployed.address)
    client.transact(lottery, 'store', [params.value])

    value = client.call(lottery, 'retrieve')
    cl_print(f'Value: {value}')
    return value
