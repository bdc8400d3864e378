import json

from parameterized import parameterized

from chainlotto.errors.exceptions import AttachError, CallRevertedError, ContractClientError, DeploymentError, \
    ErrorReport, ProviderConnectionError, SubmissionError, TransactionDroppedError, TransactionFailedError, \
    TransactionRevertedError
from chainlotto.tests.chainlotto_unit_test import ChainlottoTestCase


class TestErrorReport(ChainlottoTestCase):

    @parameterized.expand([
        (DeploymentError('constructor reverted'), 'DeploymentError'),
        (AttachError('no interface'), 'AttachError'),
        (CallRevertedError('call reverted', 'No players registered'), 'CallRevertedError'),
        (SubmissionError('insufficient funds'), 'SubmissionError'),
        (TransactionRevertedError('tx reverted', '0x01', 'Address is already registered'), 'TransactionRevertedError'),
        (TransactionDroppedError('not mined', '0x02'), 'TransactionDroppedError'),
        (ProviderConnectionError('node down'), 'ProviderConnectionError'),
    ])
    def test_report_kind(self, error, kind):
        self.assertIsInstance(error, ContractClientError)
        self.assertEqual(error.report.kind, kind)
        self.assertEqual(error.report.message, error.message)
        self.assertEqual(str(error), error.message)

    def test_failed_transaction_hierarchy(self):
        self.assertTrue(issubclass(TransactionRevertedError, TransactionFailedError))
        self.assertTrue(issubclass(TransactionDroppedError, TransactionFailedError))
        self.assertFalse(issubclass(CallRevertedError, TransactionFailedError))

    def test_revert_details(self):
        e = TransactionRevertedError('tx reverted', '0xabc', 'Contract is disabled', receipt='receipt')
        self.assertEqual(e.transaction_id, '0xabc')
        self.assertEqual(e.reason, 'Contract is disabled')
        self.assertEqual(e.receipt, 'receipt')
        self.assertIsNone(e.raw)

    def test_report_to_json(self):
        e = SubmissionError('nonce too low', raw=({'code': -32000, 'message': 'nonce too low'},))
        parsed = json.loads(e.report.to_json())
        self.assertEqual(parsed['kind'], 'SubmissionError')
        self.assertEqual(parsed['message'], 'nonce too low')
        self.assertEqual(parsed['raw'], [{'code': -32000, 'message': 'nonce too low'}])

    def test_unserializable_raw_is_stringified(self):
        report = ErrorReport('failed', 'TransactionFailedError', {'payload': b'\x01\x02'})
        parsed = json.loads(report.to_json(indent=None))
        self.assertEqual(parsed['raw'], {'payload': str(b'\x01\x02')})
