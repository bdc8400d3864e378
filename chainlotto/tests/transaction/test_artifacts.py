import json
import os
import tempfile

from chainlotto.config import cfg
from chainlotto.errors.exceptions import InterfaceResolutionError
from chainlotto.tests.chainlotto_unit_test import ChainlottoTestCase
from chainlotto.transaction.artifacts import clear_interface_cache, find_contract_source, load_hardhat_artifact, \
    resolve_contract_interface

STORAGE_ABI = [
    {'type': 'function', 'name': 'retrieve', 'stateMutability': 'view', 'inputs': [],
     'outputs': [{'name': '', 'type': 'uint256'}]},
]


def write_hardhat_artifacts(artifacts_dir: str, contract_name: str, abi, bytecode: str = '0x6080'):
    target_dir = os.path.join(artifacts_dir, 'contracts', f'{contract_name}.sol')
    os.makedirs(target_dir)
    with open(os.path.join(target_dir, f'{contract_name}.json'), 'w') as f:
        json.dump({'_format': 'hh-sol-artifact-1', 'contractName': contract_name, 'abi': abi,
                   'bytecode': bytecode, 'deployedBytecode': '0x'}, f)
    with open(os.path.join(target_dir, f'{contract_name}.dbg.json'), 'w') as f:
        json.dump({'_format': 'hh-sol-dbg-1', 'buildInfo': '../../build-info/0.json'}, f)


class TestArtifacts(ChainlottoTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.old_artifacts_dir = cfg.artifacts_dir
        self.tmp = tempfile.TemporaryDirectory()
        clear_interface_cache()

    def tearDown(self) -> None:
        cfg.artifacts_dir = self.old_artifacts_dir
        clear_interface_cache()
        self.tmp.cleanup()
        super().tearDown()

    def test_load_hardhat_artifact(self):
        write_hardhat_artifacts(self.tmp.name, 'Storage', STORAGE_ABI)
        interface = load_hardhat_artifact('Storage', self.tmp.name)
        self.assertEqual(interface['abi'], STORAGE_ABI)
        self.assertEqual(interface['bin'], '0x6080')

    def test_resolve_from_artifacts(self):
        write_hardhat_artifacts(self.tmp.name, 'Storage', STORAGE_ABI)
        cfg.artifacts_dir = self.tmp.name
        interface = resolve_contract_interface('Storage')
        self.assertEqual(interface['abi'], STORAGE_ABI)
        self.assertIs(resolve_contract_interface('Storage'), interface)

    def test_missing_artifact(self):
        cfg.artifacts_dir = self.tmp.name
        with self.assertRaises(InterfaceResolutionError):
            resolve_contract_interface('Storage')

    def test_invalid_artifact(self):
        target_dir = os.path.join(self.tmp.name, 'contracts', 'Broken.sol')
        os.makedirs(target_dir)
        with open(os.path.join(target_dir, 'Broken.json'), 'w') as f:
            f.write('{"contractName": "Broken"}')
        with self.assertRaises(InterfaceResolutionError):
            load_hardhat_artifact('Broken', self.tmp.name)

    def test_find_bundled_source(self):
        self.assertEqual(os.path.basename(find_contract_source('Lottery')), 'Lottery.sol')

    def test_find_source_by_declaration(self):
        with open(os.path.join(self.tmp.name, 'Games.sol'), 'w') as f:
            f.write('pragma solidity ^0.8.0;\ncontract Dice {}\ncontract Coin {}\n')
        self.assertEqual(find_contract_source('Coin', self.tmp.name), os.path.join(self.tmp.name, 'Games.sol'))

    def test_unknown_contract(self):
        with self.assertRaises(InterfaceResolutionError):
            resolve_contract_interface('NoSuchLottery')

    def test_missing_contracts_dir(self):
        with self.assertRaises(InterfaceResolutionError):
            find_contract_source('Lottery', os.path.join(self.tmp.name, 'nowhere'))
