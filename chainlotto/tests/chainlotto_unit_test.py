from unittest import TestCase
from abc import ABCMeta

from chainlotto.config import cfg
from chainlotto.errors.exceptions import SolcException


class ChainlottoTestCase(TestCase, metaclass=ABCMeta):
    def __init__(self, methodName: str = ...) -> None:
        super().__init__(methodName)
        self.old_was_unit_test = None

    def setUp(self) -> None:
        self.old_was_unit_test = cfg.is_unit_test
        cfg.is_unit_test = True
        super().setUp()

    def tearDown(self) -> None:
        super().tearDown()
        cfg.is_unit_test = self.old_was_unit_test


def solc_unavailable_reason():
    """Return None if a compatible solc binary is (or can be made) available, otherwise the reason why not."""
    try:
        cfg.concrete_solc_version
    except (SolcException, ValueError, OSError) as e:
        return f'solc is not available: {e}'
    return None
