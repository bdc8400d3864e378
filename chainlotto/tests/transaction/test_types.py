from unittest import TestCase

from parameterized import parameterized

from chainlotto.transaction.types import AddressValue, ContractHandle, PendingTransaction, Receipt, is_payable, \
    is_read_only

PLAYER = '0xc0ffee254729296a45a3885639AC7E10F9d54979'

LOTTERY_ABI = [
    {'type': 'constructor', 'stateMutability': 'payable', 'inputs': []},
    {'type': 'function', 'name': 'retrieve', 'stateMutability': 'view', 'inputs': [],
     'outputs': [{'name': '', 'type': 'uint256'}]},
    {'type': 'function', 'name': 'store', 'stateMutability': 'nonpayable',
     'inputs': [{'name': 'num', 'type': 'uint256'}], 'outputs': []},
    {'type': 'event', 'name': 'store', 'inputs': [], 'anonymous': False},
]


class TestAddressValue(TestCase):

    @parameterized.expand([
        ('checksum', PLAYER),
        ('lowercase', PLAYER.lower()),
        ('no_prefix', PLAYER[2:]),
        ('int', int(PLAYER, 16)),
        ('bytes', bytes.fromhex(PLAYER[2:])),
    ])
    def test_representations(self, _, val):
        addr = AddressValue(val)
        self.assertEqual(addr.checksum, PLAYER)
        self.assertEqual(str(addr), PLAYER)
        self.assertEqual(addr, AddressValue(PLAYER))
        self.assertEqual(AddressValue(addr), addr)

    @parameterized.expand([
        ('short_bytes', b'\x01' * 19),
        ('too_large', 1 << 160),
        ('not_hex', 'lottery'),
    ])
    def test_invalid(self, _, val):
        with self.assertRaises((ValueError, OverflowError)):
            AddressValue(val)

    def test_hashable(self):
        playing = {AddressValue(PLAYER): True}
        self.assertTrue(playing[AddressValue(PLAYER.lower())])

    def test_not_equal_to_plain_tuple(self):
        addr = AddressValue(PLAYER)
        self.assertNotEqual(addr, (addr.val, ))
        self.assertTrue(addr != (addr.val, ))
        self.assertFalse(addr != AddressValue(PLAYER.lower()))

    def test_unwrap_values(self):
        addr = AddressValue(PLAYER.lower())
        self.assertEqual(AddressValue.unwrap_values([1, addr, [addr], {'a': addr}]),
                         [1, PLAYER, [PLAYER], {'a': PLAYER}])


class TestAbiHelpers(TestCase):

    def test_get_function_abi(self):
        handle = ContractHandle(PLAYER, 'Lottery', LOTTERY_ABI)
        self.assertEqual(handle.get_function_abi('store')['type'], 'function')
        self.assertEqual(handle.get_function_abi('constructor')['type'], 'constructor')
        self.assertIsNone(handle.get_function_abi('registerAddress'))
        self.assertEqual(str(handle), f'Lottery@{PLAYER}')

    @parameterized.expand([
        ('payable', {'stateMutability': 'payable'}, True, False),
        ('nonpayable', {'stateMutability': 'nonpayable'}, False, False),
        ('view', {'stateMutability': 'view'}, False, True),
        ('pure', {'stateMutability': 'pure'}, False, True),
        ('legacy_payable', {'payable': True, 'constant': False}, True, False),
        ('legacy_constant', {'payable': False, 'constant': True}, False, True),
        ('missing', None, False, False),
    ])
    def test_mutability(self, _, abi, payable, read_only):
        self.assertEqual(is_payable(abi), payable)
        self.assertEqual(is_read_only(abi), read_only)


class TestReceipt(TestCase):

    def test_succeeded(self):
        self.assertTrue(Receipt('0x01', 1, 21000, 1).succeeded)
        self.assertFalse(Receipt('0x01', 1, 21000, 0).succeeded)

    def test_pending_str(self):
        handle = ContractHandle(PLAYER, 'Lottery', LOTTERY_ABI)
        self.assertEqual(str(PendingTransaction('0x01', 'store', PLAYER, handle)), f'0x01 (Lottery@{PLAYER}.store)')
        self.assertEqual(str(PendingTransaction('0x02', 'constructor', PLAYER)), '0x02 (contract creation)')
