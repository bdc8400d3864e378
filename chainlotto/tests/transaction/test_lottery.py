import os
import unittest

from chainlotto.config import cfg
from chainlotto.errors.exceptions import AttachError, CallRevertedError, TransactionRevertedError
from chainlotto.tests.chainlotto_unit_test import ChainlottoTestCase, solc_unavailable_reason
from chainlotto.transaction.artifacts import clear_interface_cache
from chainlotto.transaction.blockchain.web3py import Web3TesterBlockchain
from chainlotto.transaction.types import AddressValue


class TestLottery(ChainlottoTestCase):

    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        reason = solc_unavailable_reason()
        if reason is not None:
            raise unittest.SkipTest(reason)
        clear_interface_cache()
        cls.client = Web3TesterBlockchain()
        cls.players = cls.client.create_test_accounts(3)

    def setUp(self) -> None:
        super().setUp()
        self.lottery = self.client.deploy('Lottery')

    def test_fresh_value_is_zero(self):
        self.assertEqual(self.client.call(self.lottery, 'retrieve'), 0)
        self.assertEqual(self.client.call(self.lottery, 'getPlayerCount'), 0)
        self.assertTrue(self.client.call(self.lottery, 'getContractEnabled'))

    def test_store_then_retrieve(self):
        pending = self.client.send(self.lottery, 'store', [777])
        receipt = self.client.confirm(pending)
        self.assertTrue(receipt.succeeded)
        self.assertEqual(receipt.transaction_id, pending.transaction_id)
        self.assertEqual(self.client.call(self.lottery, 'retrieve'), 777)

    def test_store_through_attached_handle(self):
        attached = self.client.attach('Lottery', self.lottery.address)
        self.client.transact(attached, 'store', [42])
        self.assertEqual(self.client.call(self.lottery, 'retrieve'), 42)

    def test_register_two_players(self):
        first, second = self.players[:2]
        self.client.transact(self.lottery, 'registerAddress', [first])
        self.client.transact(self.lottery, 'registerAddress', [second])
        self.assertTrue(self.client.call(self.lottery, 'isAddressPlaying', [first]))
        self.assertTrue(self.client.call(self.lottery, 'isAddressPlaying', [AddressValue(second)]))
        self.assertFalse(self.client.call(self.lottery, 'isAddressPlaying', [self.players[2]]))
        self.assertEqual(self.client.call(self.lottery, 'getPlayerCount'), 2)
        winner = self.client.call(self.lottery, 'chooseWinningAddress')
        self.assertIn(winner, (first, second))

    def test_duplicate_registration(self):
        player = self.players[0]
        self.client.transact(self.lottery, 'registerAddress', [player])
        with self.assertRaises((TransactionRevertedError, CallRevertedError)) as ctx:
            self.client.transact(self.lottery, 'registerAddress', [player])
        self.assertEqual(ctx.exception.reason, 'Address is already registered')
        self.assertEqual(self.client.call(self.lottery, 'getPlayerCount'), 1)
        self.assertTrue(self.client.call(self.lottery, 'isAddressPlaying', [player]))

    def test_confirm_reverted_transaction(self):
        player = self.players[0]
        self.client.transact(self.lottery, 'registerAddress', [player])

        # An explicit gas limit skips estimation, so the revert happens on-chain
        try:
            pending = self.client.send(self.lottery, 'registerAddress', [player], gas=200000)
        except TransactionRevertedError as e:
            error = e
        else:
            with self.assertRaises(TransactionRevertedError) as ctx:
                self.client.confirm(pending)
            error = ctx.exception
            self.assertEqual(error.transaction_id, pending.transaction_id)
            self.assertFalse(error.receipt.succeeded)
        self.assertEqual(error.reason, 'Address is already registered')

    def test_view_revert_reason(self):
        with self.assertRaises(CallRevertedError) as ctx:
            self.client.call(self.lottery, 'chooseWinningAddress')
        self.assertEqual(ctx.exception.reason, 'No players registered')

    def test_only_owner(self):
        with self.assertRaises(TransactionRevertedError) as ctx:
            self.client.transact(self.lottery, 'disableContract', sender=self.players[1])
        self.assertEqual(ctx.exception.reason, 'Caller is not the owner')

    def test_disabled_contract_rejects_registration(self):
        self.client.transact(self.lottery, 'disableContract')
        self.assertFalse(self.client.call(self.lottery, 'getContractEnabled'))
        with self.assertRaises(TransactionRevertedError) as ctx:
            self.client.transact(self.lottery, 'registerAddress', [self.players[0]])
        self.assertEqual(ctx.exception.reason, 'Contract is disabled')
        self.client.transact(self.lottery, 'enableContract')
        self.assertTrue(self.client.call(self.lottery, 'getContractEnabled'))

    def test_funding_and_payout(self):
        lottery = self.client.deploy('Lottery', wei_amount=1000)
        winner = self.players[2]
        self.client.transact(lottery, 'registerAddress', [winner])
        self.client.transact(lottery, 'fundLottery', wei_amount=5000)
        self.client.transact(lottery, 'fundContract', wei_amount=300)
        self.assertEqual(self.client.call(lottery, 'getLotteryPool'), 5000)
        self.assertEqual(self.client.call(lottery, 'getBalance'), 6300)

        balance_before = self.client.get_balance(winner)
        self.client.transact(lottery, 'endLottery')
        self.assertEqual(self.client.get_balance(winner), balance_before + 5000)
        self.assertEqual(self.client.get_balance(lottery.address), 1300)
        self.assertFalse(self.client.call(lottery, 'isAddressPlaying', [winner]))

    def test_attach_without_code(self):
        empty = self.client.attach('Lottery', '0x' + '42' * 20)
        with self.assertRaises(CallRevertedError):
            self.client.call(empty, 'retrieve')

    def test_attach_unknown_contract(self):
        with self.assertRaises(AttachError):
            self.client.attach('Lotto', self.lottery.address)

    def test_deploy_solidity_contract(self):
        address = self.client.deploy_solidity_contract(os.path.join(cfg.contracts_dir, 'Foo.sol'), 'Foo')
        foo = self.client.attach('Foo', address)
        self.client.transact(foo, 'bar')
        self.assertEqual(self.client.call(foo, 'calls'), 1)
