"""
This module defines the contract client API, an abstraction layer which is used by the chainlotto scripts.

It provides high level functions for

* contract deployment and attaching to deployed contracts,
* read-only calls,
* transaction submission and confirmation.

All contract state lives on the chain, the client itself never caches it.
"""

from abc import ABCMeta, abstractmethod
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from chainlotto.compiler.solidity.compiler import compile_contract
from chainlotto.config import cfg, cl_print, cl_print_banner
from chainlotto.errors.exceptions import AttachError, CallRevertedError, DeploymentError, \
    InterfaceResolutionError, SolcException, SubmissionError
from chainlotto.my_logging.log_context import log_context
from chainlotto.transaction.artifacts import resolve_contract_interface
from chainlotto.transaction.types import AddressValue, ContractHandle, PendingTransaction, Receipt, is_payable
from chainlotto.utils.timer import time_measure

Address = Union[AddressValue, str, bytes]


def _args_to_string(args: Sequence) -> str:
    return f"({', '.join(str(arg) for arg in args)})"


class ContractClientInterface(metaclass=ABCMeta):
    """
    API to deploy contracts and interact with them.

    Every operation issues at most one request at a time and only returns once that request resolved.
    State-mutating operations are split into :py:meth:`send`, which broadcasts a transaction, and
    :py:meth:`confirm`, which waits until it is mined. Use :py:meth:`transact` to do both.

    Contracts are referred to by name, their interface (abi and bytecode) is resolved via
    :py:func:`chainlotto.transaction.artifacts.resolve_contract_interface`.
    """

    # PUBLIC API

    @property
    def default_address(self) -> Optional[AddressValue]:
        """Return wallet address to use as from address when no address is explicitly specified."""
        addr = self._default_address()
        return None if addr is None else AddressValue(addr)

    def create_test_accounts(self, count: int) -> Tuple:
        """
        Return addresses of pre-funded accounts (only implemented for w3-eth-tester and w3-ganache, for debugging).

        :param count: how many accounts
        :raise NotImplementedError: if the backend does not support dummy accounts
        :raise ValueError: if not enough unused pre-funded accounts are available
        :return: tuple of account addresses
        """
        # may not be supported by all backends
        raise NotImplementedError('Current blockchain backend does not support creating pre-funded test accounts.')

    def get_balance(self, address: Address) -> int:
        """Return the balance of the wallet or contract with the designated address (in wei)."""
        return self._get_balance(AddressValue(address).checksum)

    def deploy(self, contract_name: str, constructor_args: Sequence = (), wei_amount: Optional[int] = None,
               sender: Optional[Address] = None) -> ContractHandle:
        """
        Issue a deployment transaction which constructs the specified contract with the provided constructor arguments on the chain.

        Blocks until the deployment transaction is mined.

        **WARNING: THIS ISSUES A CRYPTO CURRENCY TRANSACTION (GAS COST)**

        :param contract_name: name of the contract to instantiate
        :param constructor_args: the constructor argument values
        :param wei_amount: how much money to send along with the constructor transaction (only for payable constructors)
        :param sender: creator address, its eth private key must be hosted in the eth node to which the backend connects.
                       Defaults to :py:attr:`default_address`.
        :raise DeploymentError: if the interface cannot be resolved, the provider rejects the transaction or the constructor reverts
        :return: handle for the newly created contract
        """
        cl_print_banner(f'Deploy {contract_name}')
        sender = self.__sender(sender, DeploymentError)

        try:
            interface = resolve_contract_interface(contract_name)
        except InterfaceResolutionError as e:
            raise DeploymentError(f'Cannot deploy {contract_name}: {e}', raw=e.args) from e
        if not interface['bin']:
            raise DeploymentError(f'Cannot deploy {contract_name}: no bytecode available (abstract contract or interface?)')

        constructor_abi = next((e for e in interface['abi'] if e.get('type') == 'constructor'), None)
        if wei_amount and not is_payable(constructor_abi):
            raise DeploymentError(f'Constructor of {contract_name} is not payable, cannot attach {wei_amount} wei')

        cl_print(f'Deploying contract {contract_name}{_args_to_string(constructor_args)}')
        with log_context('constructor'):
            with log_context(contract_name):
                handle = self._deploy(interface, contract_name, sender,
                                      *AddressValue.unwrap_values(list(constructor_args)), wei_amount=wei_amount)
        cl_print(f'Deployed contract "{contract_name}" at address "{handle.address}"\n')
        return handle

    def attach(self, contract_name: str, address: Address, extra_abi: Sequence[dict] = ()) -> ContractHandle:
        """
        Create a handle for an existing contract on the chain.

        Only the interface is bound to the address, the chain is not queried.

        :param contract_name: name of the contract which is deployed at address
        :param address: address of the deployed contract
        :param extra_abi: abi entries which are added to the resolved interface (e.g. to reach the fallback function
                          through a selector the contract does not declare)
        :raise AttachError: if the interface of contract_name cannot be resolved or address is invalid
        :return: contract handle
        """
        try:
            interface = resolve_contract_interface(contract_name)
        except InterfaceResolutionError as e:
            raise AttachError(f'Cannot attach to {contract_name}: {e}', raw=e.args) from e
        try:
            address = AddressValue(address).checksum
        except (ValueError, TypeError, AttributeError, OverflowError) as e:
            raise AttachError(f'Invalid contract address {address!r}', raw=e.args) from e
        if extra_abi:
            interface = {**interface, 'abi': list(interface['abi']) + list(extra_abi)}

        cl_print(f'Attaching to contract {contract_name}@{address}', verbosity_level=2)
        return self._attach(interface, contract_name, address)

    def call(self, handle: ContractHandle, function: str, args: Sequence = (), sender: Optional[Address] = None,
             wei_amount: Optional[int] = None) -> Any:
        """
        Call the specified function in the given contract without issuing a transaction.

        :param handle: the contract in which the function resides
        :param function: name of the function to call
        :param args: argument values
        :param sender: sender address (msg.sender during the call), defaults to :py:attr:`default_address`
        :param wei_amount: msg.value during the call
        :raise CallRevertedError: if the function does not exist, execution reverted or the result cannot be decoded
        :return: function return value (single value if one return value, list if multiple return values)
        """
        assert handle is not None
        if handle.get_function_abi(function) is None:
            raise CallRevertedError(f'Contract {handle.name} has no function {function}')
        sender = self.__sender(sender, CallRevertedError, required=False)

        cl_print(f'Calling contract function {function}{_args_to_string(args)}', verbosity_level=2)
        val = self._call(handle, sender, function, *AddressValue.unwrap_values(list(args)), wei_amount=wei_amount)
        cl_print(f'Got return value {val}', verbosity_level=2)
        return val

    def send(self, handle: ContractHandle, function: str, args: Sequence = (), sender: Optional[Address] = None,
             wei_amount: Optional[int] = None, gas: Optional[int] = None) -> PendingTransaction:
        """
        Issue a transaction for the specified function in the given contract with the provided arguments.

        Returns as soon as the transaction is broadcast, its effects are only observable after :py:meth:`confirm`.

        **WARNING: THIS ISSUES A CRYPTO CURRENCY TRANSACTION (GAS COST)**

        :param handle: the contract in which the function resides
        :param function: name of the function
        :param args: the function argument values
        :param sender: sender address, its eth private key must be hosted in the eth node to which the backend connects.
                       Defaults to :py:attr:`default_address`.
        :param wei_amount: how much money to send along with the transaction (only for payable functions)
        :param gas: gas limit, estimated if not specified
        :raise SubmissionError: if the provider rejects the transaction before broadcast
        :raise TransactionRevertedError: if the provider already detects during submission that execution reverts
        :return: the pending transaction
        """
        assert handle is not None
        function_abi = handle.get_function_abi(function)
        if function_abi is None:
            raise SubmissionError(f'Contract {handle.name} has no function {function}')
        if wei_amount and not is_payable(function_abi):
            raise SubmissionError(f'Function {handle.name}.{function} is not payable, cannot attach {wei_amount} wei')
        sender = self.__sender(sender, SubmissionError)

        cl_print(f'Issuing transaction for function "{function}" from account "{sender}"')
        cl_print(_args_to_string(args), verbosity_level=2)
        with log_context(function):
            pending = self._send(handle, sender, function, *AddressValue.unwrap_values(list(args)),
                                 wei_amount=wei_amount, gas=gas)
        cl_print(f'Transaction {pending.transaction_id} submitted', verbosity_level=2)
        return pending

    def confirm(self, pending: PendingTransaction) -> Receipt:
        """
        Wait until the pending transaction is mined.

        :param pending: transaction returned by :py:meth:`send`
        :raise TransactionRevertedError: if execution reverted on-chain (contains the revert reason if available)
        :raise TransactionDroppedError: if the transaction is not mined within cfg.blockchain_confirmation_timeout seconds
        :return: the transaction receipt
        """
        assert pending is not None
        with log_context(pending.function):
            with time_measure('confirmation'):
                receipt = self._confirm(pending)
        cl_print(f'Transaction {pending.transaction_id} mined in block {receipt.block_number}', verbosity_level=2)
        return receipt

    def transact(self, handle: ContractHandle, function: str, args: Sequence = (), sender: Optional[Address] = None,
                 wei_amount: Optional[int] = None, gas: Optional[int] = None) -> Receipt:
        """
        Issue a transaction and wait for its confirmation (:py:meth:`send` followed by :py:meth:`confirm`).

        **WARNING: THIS ISSUES A CRYPTO CURRENCY TRANSACTION (GAS COST)**
        """
        ret = self.confirm(self.send(handle, function, args, sender=sender, wei_amount=wei_amount, gas=gas))
        cl_print()
        return ret

    def deploy_solidity_contract(self, sol_filename: str, contract_name: str, sender: Optional[Address] = None,
                                 constructor_args: Sequence = ()) -> str:
        """
        Compile and deploy the specified solidity contract.

        :param sol_filename: solidity file
        :param contract_name: specifies which contract from the .sol file to deploy
        :param sender: account address from which to issue the deployment transaction (keys must be hosted in node)
        :param constructor_args: the constructor argument values
        :raise DeploymentError: if compilation or deployment fails
        :return: Address of the deployed contract
        """
        sender = self.__sender(sender, DeploymentError)
        try:
            interface = compile_contract(sol_filename, contract_name)
        except (SolcException, ValueError) as e:
            raise DeploymentError(f'Failed to compile {contract_name}\n{e}', raw=e.args) from e
        handle = self._deploy(interface, contract_name, sender, *AddressValue.unwrap_values(list(constructor_args)))
        return handle.address

    @classmethod
    def is_debug_backend(cls) -> bool:
        return False

    # INTERNAL FUNCTIONALITY

    def __sender(self, sender: Optional[Address], error_cls, required: bool = True) -> Optional[str]:
        if sender is None:
            try:
                default = self.default_address
            except IndexError as e:
                raise error_cls(f'Default account index {cfg.blockchain_default_account} does not exist on this chain',
                                raw=e.args) from e
            if default is None:
                if required:
                    raise error_cls('No sender specified and no default account configured')
                return None
            return default.checksum
        try:
            return AddressValue(sender).checksum
        except (ValueError, TypeError, AttributeError, OverflowError) as e:
            raise error_cls(f'Invalid sender address {sender!r}', raw=e.args) from e

    @abstractmethod
    def _default_address(self) -> Union[None, bytes, str]:
        pass

    @abstractmethod
    def _get_balance(self, address: str) -> int:
        pass

    @abstractmethod
    def _deploy(self, interface: Dict, contract_name: str, sender: str, *actual_args,
                wei_amount: Optional[int] = None) -> ContractHandle:
        pass

    @abstractmethod
    def _attach(self, interface: Dict, contract_name: str, address: str) -> ContractHandle:
        pass

    @abstractmethod
    def _call(self, handle: ContractHandle, sender: Optional[str], function: str, *args,
              wei_amount: Optional[int] = None) -> Any:
        pass

    @abstractmethod
    def _send(self, handle: ContractHandle, sender: str, function: str, *args,
              wei_amount: Optional[int] = None, gas: Optional[int] = None) -> PendingTransaction:
        pass

    @abstractmethod
    def _confirm(self, pending: PendingTransaction) -> Receipt:
        pass
