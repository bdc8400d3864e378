"""Deploy a MusicslayerLottery, buy tickets and withdraw unreserved contract funds."""
from typing import NamedTuple, Optional

from chainlotto.config import cl_print
from chainlotto.transaction.interface import ContractClientInterface
from chainlotto.utils.helpers import format_ether, parse_ether


class BuyTicketsParams(NamedTuple):
    ticket_limit: int = 5
    ticket_price: int = parse_ether('0.01')
    starting_balance: int = parse_ether('0.00000000000001')
    tickets: int = 1
    remove_funds: Optional[int] = 5000


class BuyTicketsResult(NamedTuple):
    address: str
    tickets: int
    claimable_balance: int
    contract_balance: int


def run(client: ContractClientInterface, params: BuyTicketsParams = BuyTicketsParams()) -> BuyTicketsResult:
    lottery = client.deploy('MusicslayerLottery', (params.ticket_limit, params.ticket_price),
                            wei_amount=params.starting_balance)
    cl_print(f'Lottery deployed at: {lottery.address}')

    buyer = client.default_address
    if params.tickets:
        client.transact(lottery, 'action_buyTickets', wei_amount=params.tickets * params.ticket_price)
    if params.remove_funds:
        client.transact(lottery, 'removeContractFunds', [params.remove_funds])

    result = BuyTicketsResult(
        lottery.address,
        client.call(lottery, 'get_addressTickets', [buyer]),
        client.call(lottery, 'get_addressClaimableBalance', [buyer]),
        client.get_balance(lottery.address),
    )
    cl_print(f'Tickets: {result.tickets}, claimable: {format_ether(result.claimable_balance)} ether, '
             f'contract balance: {result.contract_balance} wei')
    return result
