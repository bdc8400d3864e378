from chainlotto.config import cfg
from chainlotto.transaction.blockchain import *
from chainlotto.transaction.interface import ContractClientInterface

_blockchain_classes = {
    'w3-eth-tester': Web3TesterBlockchain,
    'w3-ganache': Web3HttpGanacheBlockchain,
    'w3-ipc': Web3IpcBlockchain,
    'w3-http': Web3HttpBlockchain,
    'w3-custom': Web3CustomBlockchain
}


class Runtime:
    """
    Provides global access to the singleton contract client backend.
    See interface.py for more information.

    The global configuration in config.py determines which backend is made available via the Runtime class.
    """

    __blockchain = None

    @staticmethod
    def reset():
        """
        Reboot the runtime.

        When a new backend is selected in the configuration, it will only be loaded after a runtime reset.
        """
        Runtime.__blockchain = None

    @staticmethod
    def blockchain() -> ContractClientInterface:
        """Return singleton object which implements ContractClientInterface."""
        if Runtime.__blockchain is None:
            Runtime.__blockchain = _blockchain_classes[cfg.blockchain_backend]()
        return Runtime.__blockchain
