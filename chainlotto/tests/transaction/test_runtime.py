from chainlotto.config import cfg
from chainlotto.tests.chainlotto_unit_test import ChainlottoTestCase
from chainlotto.transaction.blockchain.web3py import Web3TesterBlockchain
from chainlotto.transaction.runtime import Runtime
from chainlotto.transaction.types import AddressValue


class TestRuntime(ChainlottoTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.old_backend = cfg.blockchain_backend
        cfg.blockchain_backend = 'w3-eth-tester'
        Runtime.reset()

    def tearDown(self) -> None:
        cfg.blockchain_backend = self.old_backend
        Runtime.reset()
        super().tearDown()

    def test_singleton(self):
        client = Runtime.blockchain()
        self.assertIsInstance(client, Web3TesterBlockchain)
        self.assertIs(Runtime.blockchain(), client)

        Runtime.reset()
        self.assertIsNot(Runtime.blockchain(), client)

    def test_balance_only_via_client(self):
        client = Runtime.blockchain()
        self.assertFalse(hasattr(AddressValue, 'get_balance'))
        self.assertGreater(client.get_balance(client.default_address), 0)
