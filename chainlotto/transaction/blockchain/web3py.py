from abc import abstractmethod
from typing import Any, Dict, Optional, Tuple, Union

from eth_tester import EthereumTester, PyEVMBackend
from eth_tester.exceptions import TransactionFailed
from web3 import EthereumTesterProvider, HTTPProvider, IPCProvider, Web3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError, TimeExhausted

from chainlotto import my_logging
from chainlotto.config import cfg, cl_print
from chainlotto.errors.exceptions import CallRevertedError, ContractClientError, DeploymentError, \
    ProviderConnectionError, SubmissionError, TransactionDroppedError, TransactionFailedError, TransactionRevertedError
from chainlotto.transaction.interface import ContractClientInterface
from chainlotto.transaction.types import ContractHandle, PendingTransaction, Receipt

REVERT_PREFIX = 'execution reverted'


def revert_reason(e: Exception) -> Optional[str]:
    """Extract the revert reason string from a revert exception (None if the contract did not provide one)."""
    msg = getattr(e, 'message', None) or (str(e.args[0]) if e.args else '')
    if msg.startswith(REVERT_PREFIX):
        msg = msg[len(REVERT_PREFIX):].lstrip(':').strip()
    return msg or None


def _with_reason(message: str, reason: Optional[str]) -> str:
    return message if reason is None else f'{message}: {reason}'


class Web3Blockchain(ContractClientInterface):
    # Exceptions by which the provider signals that execution reverted
    _revert_errors: Tuple = (ContractLogicError, )

    def __init__(self) -> None:
        super().__init__()
        self.w3 = self._create_w3_instance()
        if not self.w3.is_connected():
            raise ProviderConnectionError(f'Failed to connect to blockchain: {self.w3.provider}')

    @abstractmethod
    def _create_w3_instance(self) -> Web3:
        pass

    def _default_address(self) -> Union[None, bytes, str]:
        if cfg.blockchain_default_account is None:
            return None
        elif isinstance(cfg.blockchain_default_account, int):
            return self.w3.eth.accounts[cfg.blockchain_default_account]
        else:
            return cfg.blockchain_default_account

    def _get_balance(self, address: str) -> int:
        return self.w3.eth.get_balance(address)

    def _deploy(self, interface: Dict, contract_name: str, sender: str, *actual_args,
                wei_amount: Optional[int] = None) -> ContractHandle:
        contract = self.w3.eth.contract(abi=interface['abi'], bytecode=interface['bin'])
        try:
            pending = self._submit(contract.constructor, 'constructor', sender, *actual_args, wei_amount=wei_amount)
            receipt = self._confirm(pending)
        except ContractClientError as e:
            raise DeploymentError(f'Deployment of {contract_name} failed: {e.message}', raw=e.raw) from e

        return self._attach(interface, contract_name, receipt.contract_address)

    def _attach(self, interface: Dict, contract_name: str, address: str) -> ContractHandle:
        contract = self.w3.eth.contract(address=address, abi=interface['abi'])
        return ContractHandle(str(contract.address), contract_name, interface['abi'], contract)

    def _call(self, handle: ContractHandle, sender: Optional[str], function: str, *args,
              wei_amount: Optional[int] = None) -> Any:
        fct = handle.contract.functions[function]
        tx = {} if sender is None else {'from': sender}
        if wei_amount:
            tx['value'] = wei_amount
        try:
            return fct(*args).call(tx)
        except self._revert_errors as e:
            reason = revert_reason(e)
            raise CallRevertedError(_with_reason(f'Call to {handle}.{function} reverted', reason), reason, raw=e.args) from e
        except BadFunctionCallOutput as e:
            raise CallRevertedError(f'Call to {handle}.{function} returned no decodable data, '
                                    f'is the contract deployed at {handle.address}?', raw=e.args) from e
        except Exception as e:
            raise CallRevertedError(f'Call to {handle}.{function} failed: {e}', raw=e.args) from e

    def _send(self, handle: ContractHandle, sender: str, function: str, *args,
              wei_amount: Optional[int] = None, gas: Optional[int] = None) -> PendingTransaction:
        return self._submit(handle.contract.functions[function], function, sender, *args,
                            wei_amount=wei_amount, gas=gas, handle=handle)

    def _submit(self, fct, function: str, sender: str, *args, wei_amount: Optional[int] = None,
                gas: Optional[int] = None, handle: Optional[ContractHandle] = None) -> PendingTransaction:
        """Build and broadcast a transaction for fct (a contract function or constructor)."""
        tx = {'from': sender}
        if wei_amount:
            tx['value'] = wei_amount
        try:
            tx['gas'] = self._gas_heuristic(fct(*args), tx) if gas is None else gas
            tx_hash = fct(*args).transact(tx)
        except self._revert_errors as e:
            reason = revert_reason(e)
            raise TransactionRevertedError(_with_reason(f'Transaction {function} reverted', reason),
                                           reason=reason, raw=e.args) from e
        except Exception as e:
            raise SubmissionError(f'Transaction {function} was rejected: {e}', raw=e.args) from e

        return PendingTransaction(Web3.to_hex(tx_hash), function, sender, handle)

    def _confirm(self, pending: PendingTransaction) -> Receipt:
        try:
            raw = self._wait_for_receipt(pending.transaction_id)
        except TimeExhausted as e:
            raise TransactionDroppedError(f'Transaction {pending} was not mined within '
                                          f'{cfg.blockchain_confirmation_timeout} seconds',
                                          pending.transaction_id, raw=e.args) from e
        except Exception as e:
            raise TransactionFailedError(f'Waiting for transaction {pending} failed: {e}',
                                         pending.transaction_id, raw=e.args) from e

        receipt = Receipt(pending.transaction_id, raw['blockNumber'], raw['gasUsed'], raw['status'],
                          raw.get('contractAddress'), dict(raw))
        if not receipt.succeeded:
            reason = self._replay_for_revert_reason(pending, receipt)
            raise TransactionRevertedError(_with_reason(f'Transaction {pending} reverted', reason),
                                           pending.transaction_id, reason, receipt, raw=receipt.raw)

        cl_print(f"Consumed gas: {receipt.gas_used}")
        my_logging.data('gas', receipt.gas_used)
        return receipt

    def _wait_for_receipt(self, transaction_id: str) -> Any:
        return self.w3.eth.wait_for_transaction_receipt(transaction_id, timeout=cfg.blockchain_confirmation_timeout,
                                                        poll_latency=cfg.blockchain_poll_latency)

    def _replay_for_revert_reason(self, pending: PendingTransaction, receipt: Receipt) -> Optional[str]:
        """Re-execute a reverted transaction as a call on the parent block state to recover its revert reason."""
        try:
            tx = self.w3.eth.get_transaction(pending.transaction_id)
            replay = {'from': tx['from'], 'data': tx.get('input', tx.get('data')), 'value': tx['value'],
                      'gas': tx['gas']}
            if tx.get('to') is not None:
                replay['to'] = tx['to']
            self.w3.eth.call(replay, max(receipt.block_number - 1, 0))
        except self._revert_errors as e:
            return revert_reason(e)
        except Exception as e:
            my_logging.debug(f'Could not replay transaction {pending.transaction_id}: {e}')
        return None

    def _gas_heuristic(self, fct_call, tx: Dict) -> int:
        limit = self.w3.eth.get_block('latest')['gasLimit']
        estimate = fct_call.estimate_gas({**tx, 'gas': limit})
        return min(int(estimate * cfg.gas_estimate_factor), limit)


class _TestAccountsMixin:
    """Hands out the pre-funded accounts of a development chain, account 0 stays reserved as default sender."""
    next_acc_idx = 1

    @classmethod
    def is_debug_backend(cls) -> bool:
        return True

    def create_test_accounts(self, count: int) -> Tuple:
        accounts = self.w3.eth.accounts
        if len(accounts[self.next_acc_idx:]) < count:
            raise ValueError(f'Can have at most {len(accounts)-1} dummy accounts in total')
        dummy_accounts = tuple(accounts[self.next_acc_idx:self.next_acc_idx + count])
        self.next_acc_idx += count
        return dummy_accounts


class Web3TesterBlockchain(_TestAccountsMixin, Web3Blockchain):
    _revert_errors = (ContractLogicError, TransactionFailed)

    def __init__(self) -> None:
        self.eth_tester = None
        super().__init__()

    def _create_w3_instance(self) -> Web3:
        self.eth_tester = EthereumTester(backend=PyEVMBackend())
        w3 = Web3(EthereumTesterProvider(self.eth_tester))
        return w3


class Web3IpcBlockchain(Web3Blockchain):
    def _create_w3_instance(self) -> Web3:
        assert cfg.blockchain_node_uri is None or isinstance(cfg.blockchain_node_uri, str)
        return Web3(IPCProvider(cfg.blockchain_node_uri))


class Web3HttpBlockchain(Web3Blockchain):
    def _create_w3_instance(self) -> Web3:
        assert cfg.blockchain_node_uri is None or isinstance(cfg.blockchain_node_uri, str)
        return Web3(HTTPProvider(cfg.blockchain_node_uri))


class Web3HttpGanacheBlockchain(_TestAccountsMixin, Web3HttpBlockchain):
    pass


class Web3CustomBlockchain(Web3Blockchain):
    def _create_w3_instance(self) -> Web3:
        assert isinstance(cfg.blockchain_node_uri, Web3)
        return cfg.blockchain_node_uri
