import json
import os
import tempfile

from chainlotto import my_logging
from chainlotto.my_logging.log_context import full_log_context, log_context
from chainlotto.tests.chainlotto_unit_test import ChainlottoTestCase
from chainlotto.utils.timer import time_measure


class TestDataLog(ChainlottoTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.tmp = tempfile.TemporaryDirectory()
        self.log_file = my_logging.get_log_file(label=None, parent_dir=self.tmp.name, filename='test',
                                                include_timestamp=False)
        my_logging.prepare_logger(self.log_file)

    def tearDown(self) -> None:
        my_logging.prepare_logger()
        self.tmp.cleanup()
        super().tearDown()

    def read_data(self):
        with open(self.log_file + '_data.log') as f:
            return [json.loads(line) for line in f if line.strip()]

    def test_data_with_context(self):
        with log_context('Lottery'):
            with log_context('registerAddress'):
                my_logging.data('gas', 46000)
            my_logging.info('deployed')
        self.assertEqual(full_log_context, [])
        self.assertEqual(self.read_data(), [{'key': 'gas', 'value': 46000, 'context': ['Lottery', 'registerAddress']}])

        with open(self.log_file + '_info.log') as f:
            info = f.read()
        self.assertIn('deployed', info)
        self.assertNotIn('gas', info)

    def test_context_popped_on_error(self):
        with self.assertRaises(ValueError):
            with log_context('failing'):
                raise ValueError()
        self.assertEqual(full_log_context, [])

    def test_time_measure(self):
        with time_measure('confirmation'):
            pass
        entries = self.read_data()
        self.assertEqual(entries[0]['key'], 'time_confirmation')
        self.assertGreaterEqual(entries[0]['value'], 0)

    def test_log_dir(self):
        d = my_logging.get_log_file(label='scripts', parent_dir=self.tmp.name, filename='run')
        self.assertTrue(os.path.isdir(os.path.dirname(d)))
        self.assertTrue(os.path.basename(d).startswith('run_'))
