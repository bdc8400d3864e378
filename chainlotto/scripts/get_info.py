"""Deploy a lottery contract and print where it lives."""
from typing import Dict, NamedTuple, Optional, Tuple

from chainlotto.config import cl_print
from chainlotto.transaction.interface import ContractClientInterface
from chainlotto.transaction.types import AddressValue
from chainlotto.utils.helpers import parse_ether


class GetInfoParams(NamedTuple):
    contract_name: str = 'Lottery'
    constructor_args: Tuple = ()
    starting_balance: Optional[int] = None
    claimant: Optional[AddressValue] = None


MUSICSLAYER_INFO = GetInfoParams(
    contract_name='MusicslayerLottery',
    constructor_args=(5, parse_ether('0.01')),
    starting_balance=parse_ether('0.00000000000001'),
    claimant=AddressValue('0xb15b75994a040E63Eb961d8c3D26cB0A4e9D5E49'),
)


def run(client: ContractClientInterface, params: GetInfoParams = GetInfoParams()) -> Dict:
    cl_print('Start')
    lottery = client.deploy(params.contract_name, params.constructor_args, wei_amount=params.starting_balance)
    cl_print(f'Lottery deployed at: {lottery.address}')

    info = {'address': lottery.address, 'balance': client.get_balance(lottery.address)}
    if params.claimant is not None:
        info['claimable_balance'] = client.call(lottery, 'get_addressClaimableBalance', [params.claimant])
        cl_print(f'Claimable balance of {params.claimant}: {info["claimable_balance"]}')

    cl_print('End')
    return info
