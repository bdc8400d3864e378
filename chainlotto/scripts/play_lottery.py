"""
Register players in a Lottery contract and choose a winner.

Registering the first player a second time is expected to fail, that failure is reported and the
remaining steps continue. The same holds for the optional enabled check on a disabled contract and for
calling a function the contract does not declare. Any other failure aborts the script.
"""
from typing import NamedTuple, Optional, Tuple, Dict

from chainlotto import my_logging
from chainlotto.config import cl_print
from chainlotto.errors.exceptions import CallRevertedError, ErrorReport, TransactionRevertedError
from chainlotto.transaction.interface import ContractClientInterface
from chainlotto.transaction.types import AddressValue, ContractHandle, Receipt
from chainlotto.utils.progress_printer import warn_print

DEFAULT_PLAYERS = (
    AddressValue('0xc0ffee254729296a45a3885639AC7E10F9d54979'),
    AddressValue('0x999999cf1046e68e36E1aA2E0E07105eDDD1f08E'),
)

# Selector the Lottery contract does not declare, calling it runs into the fallback function
MISSING_FUNCTION_ABI = {
    'type': 'function', 'name': 'nonExistentFunction', 'stateMutability': 'nonpayable',
    'inputs': [{'name': 'a', 'type': 'uint256'}, {'name': 'b', 'type': 'uint256'}],
    'outputs': [],
}


class PlayLotteryParams(NamedTuple):
    players: Tuple[AddressValue, ...] = DEFAULT_PLAYERS
    starting_balance: Optional[int] = None
    lottery_funding: Optional[int] = None
    contract_funding: Optional[int] = None
    end_lottery: bool = False
    toggle_enabled: bool = False
    call_missing_function: bool = False


class PlayLotteryResult(NamedTuple):
    address: str
    playing: Dict[AddressValue, bool]
    duplicate_registration: Optional[ErrorReport]
    winner: AddressValue
    balance_before: int
    balance_after: int
    disabled_check: Optional[ErrorReport] = None
    missing_function: Optional[ErrorReport] = None


def register_address(client: ContractClientInterface, lottery: ContractHandle, player: AddressValue) -> Receipt:
    return client.transact(lottery, 'registerAddress', [player])


def is_address_playing(client: ContractClientInterface, lottery: ContractHandle, player: AddressValue) -> bool:
    return client.call(lottery, 'isAddressPlaying', [player])


def choose_winning_address(client: ContractClientInterface, lottery: ContractHandle) -> AddressValue:
    return AddressValue(client.call(lottery, 'chooseWinningAddress'))


def get_balance(client: ContractClientInterface, lottery: ContractHandle) -> int:
    return client.call(lottery, 'getBalance')


def set_contract_enabled(client: ContractClientInterface, lottery: ContractHandle, enabled: bool) -> Receipt:
    return client.transact(lottery, 'enableContract' if enabled else 'disableContract')


def require_contract_enabled(client: ContractClientInterface, lottery: ContractHandle) -> Receipt:
    return client.transact(lottery, 'requireContractEnabled')


def call_missing_function(client: ContractClientInterface, lottery: ContractHandle) -> Receipt:
    """Send nonExistentFunction(0, 0), which the contract does not declare and thus ends up in its fallback."""
    fake = client.attach(lottery.name, lottery.address, extra_abi=[MISSING_FUNCTION_ABI])
    return client.transact(fake, MISSING_FUNCTION_ABI['name'], [0, 0])


def _expect_revert(what: str, f, *args) -> Optional[ErrorReport]:
    try:
        f(*args)
    except (TransactionRevertedError, CallRevertedError) as e:
        my_logging.warning(f'{what} rejected: {e.message}')
        with warn_print():
            cl_print(f'ERROR:\n{e.report.to_json()}')
        return e.report
    return None


def run(client: ContractClientInterface, params: PlayLotteryParams = PlayLotteryParams()) -> PlayLotteryResult:
    if not params.players:
        raise ValueError('At least one player is required')

    lottery = client.deploy('Lottery', wei_amount=params.starting_balance)
    cl_print(f'Lottery deployed at: {lottery.address}')

    first = params.players[0]
    cl_print(f'isPlaying: {is_address_playing(client, lottery, first)}')
    register_address(client, lottery, first)
    cl_print(f'isPlaying: {is_address_playing(client, lottery, first)}')

    # Register the same address again, the contract rejects it
    duplicate = _expect_revert(f'Duplicate registration of {first}', register_address, client, lottery, first)

    for player in params.players[1:]:
        register_address(client, lottery, player)

    winner = choose_winning_address(client, lottery)
    cl_print(f'Winner: {winner}')

    if params.lottery_funding:
        client.transact(lottery, 'fundLottery', wei_amount=params.lottery_funding)
    if params.contract_funding:
        client.transact(lottery, 'fundContract', wei_amount=params.contract_funding)

    balance_before = get_balance(client, lottery)
    cl_print(f'Balance Before: {balance_before}')
    if params.end_lottery:
        client.transact(lottery, 'endLottery')
    balance_after = get_balance(client, lottery)
    cl_print(f'Balance After: {balance_after}')

    disabled_check = None
    if params.toggle_enabled:
        set_contract_enabled(client, lottery, False)
        cl_print(f'enabled? {client.call(lottery, "getContractEnabled")}')
        disabled_check = _expect_revert('Enabled check on disabled contract', require_contract_enabled, client, lottery)
        set_contract_enabled(client, lottery, True)
        cl_print(f'enabled? {client.call(lottery, "getContractEnabled")}')

    missing_function = None
    if params.call_missing_function:
        cl_print('X')
        missing_function = _expect_revert('Call of undeclared function', call_missing_function, client, lottery)
        cl_print('Y')

    playing = {player: is_address_playing(client, lottery, player) for player in params.players}
    return PlayLotteryResult(lottery.address, playing, duplicate, winner, balance_before, balance_after,
                             disabled_check, missing_function)
