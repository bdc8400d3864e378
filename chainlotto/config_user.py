"""
This module defines the chainlotto options which are configurable by the user via command line arguments.

The argument parser in :py:mod:`.__main__` uses the docstrings, type hints and _values for the help
 strings and the _values fields for autocompletion

WARNING: This is one of the only chainlotto modules that is imported before argcomplete.autocomplete is called. \
For performance reasons it should thus not have any import side-effects or perform any expensive operations during import.
"""
import os
from typing import Any, Union

from appdirs import AppDirs


def _check_is_one_of(val: str, legal_vals):
    if val not in legal_vals:
        raise ValueError(f'Invalid config value {val}, must be one of {legal_vals}')


def _type_check(val: Any, t):
    if not isinstance(val, t):
        raise ValueError(f'Value {val} has wrong type (expected {t})')


class UserConfig:
    def __init__(self):
        self._appdirs = AppDirs('chainlotto', appauthor=False, version=None, roaming=True)

        # User configuration
        # Each attribute must have a type hint and a docstring for correct help strings in the commandline interface.
        # If 'Available Options: [...]' is specified, the options are used for autocomplete suggestions.

        self._blockchain_backend: str = 'w3-eth-tester'
        self._blockchain_backend_values = ['w3-eth-tester', 'w3-ganache', 'w3-ipc', 'w3-http', 'w3-custom']

        self._blockchain_node_uri: Union[Any, str, None] = 'http://localhost:8545'
        self._blockchain_default_account: Union[int, str, None] = 0
        self._blockchain_confirmation_timeout: int = 120
        self._blockchain_poll_latency: float = 0.1

        self._contracts_dir: str = os.path.join(os.path.dirname(os.path.realpath(__file__)), 'contracts')
        self._artifacts_dir: str = ''

        self._solc_version: str = 'latest'
        self._opt_solc_optimizer_runs: int = 200
        self._evm_version: str = 'paris'
        self._evm_version_values = ['london', 'paris', 'shanghai', 'cancun']

        self._log_dir: str = self._appdirs.user_log_dir
        self._verbosity: int = 1

    @property
    def blockchain_backend(self) -> str:
        """
        Backend to use when interacting with the blockchain.

        Running unit tests is only supported with w3-eth-tester and w3-ganache at the moment (because they need pre-funded dummy accounts).
        w3-ganache works with any local development node exposing unlocked accounts (ganache, hardhat node, anvil).
        See https://web3py.readthedocs.io/en/stable/providers.html for more information.

        Available Options: [w3-eth-tester, w3-ganache, w3-ipc, w3-http, w3-custom]
        """
        return self._blockchain_backend

    @blockchain_backend.setter
    def blockchain_backend(self, val: str):
        _check_is_one_of(val, self._blockchain_backend_values)
        self._blockchain_backend = val

    @property
    def blockchain_node_uri(self) -> Union[Any, str, None]:
        """
        Backend specific location of the ethereum node
        w3-eth-tester : unused
        w3-ganache    : url
        w3-ipc        : path to ipc socket file
        w3-http       : url
        w3-custom     : web3 instance, must not be None
        """
        return self._blockchain_node_uri

    @blockchain_node_uri.setter
    def blockchain_node_uri(self, val: Union[Any, str, None]):
        self._blockchain_node_uri = val

    @property
    def blockchain_default_account(self) -> Union[int, str, None]:
        """
        Address of the wallet which is used as sender when no sender is explicitly specified.

        If None -> must always specify a sender
        If int -> use eth.accounts[int]
        If str -> use address str
        """
        return self._blockchain_default_account

    @blockchain_default_account.setter
    def blockchain_default_account(self, val: Union[int, str, None]):
        _type_check(val, (int, str, type(None)))
        self._blockchain_default_account = val

    @property
    def blockchain_confirmation_timeout(self) -> int:
        """
        How many seconds to wait for a transaction receipt before the transaction is considered dropped.
        """
        return self._blockchain_confirmation_timeout

    @blockchain_confirmation_timeout.setter
    def blockchain_confirmation_timeout(self, val: int):
        _type_check(val, int)
        if val <= 0:
            raise ValueError(f'Confirmation timeout must be positive, was {val}')
        self._blockchain_confirmation_timeout = val

    @property
    def blockchain_poll_latency(self) -> float:
        """Interval (in seconds) between two receipt requests while waiting for a confirmation."""
        return self._blockchain_poll_latency

    @blockchain_poll_latency.setter
    def blockchain_poll_latency(self, val: float):
        _type_check(val, (int, float))
        self._blockchain_poll_latency = float(val)

    @property
    def contracts_dir(self) -> str:
        """
        Directory which is searched for solidity sources when a contract is referred to by name.

        Defaults to the contracts bundled with chainlotto.
        """
        return self._contracts_dir

    @contracts_dir.setter
    def contracts_dir(self, val: str):
        _type_check(val, str)
        self._contracts_dir = val

    @property
    def artifacts_dir(self) -> str:
        """
        Hardhat artifacts directory (e.g. "./artifacts").

        If not empty, contract interfaces (abi and bytecode) are loaded from the <ContractName>.json
        artifact files in this directory instead of compiling the sources in contracts_dir.
        """
        return self._artifacts_dir

    @artifacts_dir.setter
    def artifacts_dir(self, val: str):
        _type_check(val, str)
        self._artifacts_dir = val

    @property
    def solc_version(self) -> str:
        """
        Solc version to compile contracts with (e.g. v0.8.19).

        'latest' selects the newest installed version which is compatible with the bundled contracts.
        """
        return self._solc_version

    @solc_version.setter
    def solc_version(self, val: str):
        _type_check(val, str)
        self._solc_version = val

    @property
    def opt_solc_optimizer_runs(self) -> int:
        """SOLC: optimize for how many times to run the code, a negative value disables the optimizer"""
        return self._opt_solc_optimizer_runs

    @opt_solc_optimizer_runs.setter
    def opt_solc_optimizer_runs(self, val: int):
        _type_check(val, int)
        self._opt_solc_optimizer_runs = val

    @property
    def evm_version(self) -> str:
        """
        SOLC: target evm version.

        Available Options: [london, paris, shanghai, cancun]
        """
        return self._evm_version

    @evm_version.setter
    def evm_version(self, val: str):
        _check_is_one_of(val, self._evm_version_values)
        self._evm_version = val

    @property
    def log_dir(self) -> str:
        """Path to default log directory."""
        return self._log_dir

    @log_dir.setter
    def log_dir(self, val: str):
        _type_check(val, str)
        if not os.path.exists(val):
            os.makedirs(val)
        self._log_dir = val

    @property
    def verbosity(self) -> int:
        """
        If 0, no output
        If 1, normal output
        If 2, verbose output

        This includes for example the arguments and return values of all contract calls.
        """
        return self._verbosity

    @verbosity.setter
    def verbosity(self, val: int):
        _type_check(val, int)
        self._verbosity = val
