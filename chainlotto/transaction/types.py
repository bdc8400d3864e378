from typing import Any, List, NamedTuple, Optional, Union

from eth_utils import to_checksum_address


class AddressValue(tuple):
    """A 20 byte account or contract address."""

    def __new__(cls, val: Union[str, int, bytes, 'AddressValue']):
        if isinstance(val, AddressValue):
            val = val.val
        if not isinstance(val, bytes):
            if isinstance(val, str):
                val = int(val, 16)
            val = val.to_bytes(20, byteorder='big')
        if len(val) != 20:
            raise ValueError(f'Address must be 20 bytes long, got {len(val)}')
        return super(AddressValue, cls).__new__(cls, [val])

    @property
    def val(self) -> bytes:
        return self[0]

    @property
    def checksum(self) -> str:
        return to_checksum_address(self.val)

    def __str__(self):
        return self.checksum

    def __repr__(self):
        return f'AddressValue({self.checksum})'

    def __eq__(self, other):
        return isinstance(other, AddressValue) and super().__eq__(other)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return self.val.__hash__()

    @staticmethod
    def unwrap_values(v: Any) -> Any:
        """Replace AddressValues in (nested) argument lists by checksum address strings."""
        if isinstance(v, AddressValue):
            return v.checksum
        elif isinstance(v, (list, tuple)):
            return [AddressValue.unwrap_values(e) for e in v]
        elif isinstance(v, dict):
            return {key: AddressValue.unwrap_values(val) for key, val in v.items()}
        else:
            return v


class ContractHandle(NamedTuple):
    """Binding of a contract interface to a deployed contract instance."""
    address: str
    name: str
    abi: List[dict]
    contract: Any = None

    def __str__(self):
        return f'{self.name}@{self.address}'

    def get_function_abi(self, function: str) -> Optional[dict]:
        if function == 'constructor':
            return next((e for e in self.abi if e.get('type') == 'constructor'), None)
        return next((e for e in self.abi if e.get('type') == 'function' and e.get('name') == function), None)


class PendingTransaction(NamedTuple):
    """A broadcast transaction, its effects are not observable before it is confirmed."""
    transaction_id: str
    function: str
    sender: str
    handle: Optional[ContractHandle] = None

    def __str__(self):
        target = 'contract creation' if self.handle is None else f'{self.handle}.{self.function}'
        return f'{self.transaction_id} ({target})'


class Receipt(NamedTuple):
    """Confirmation of a mined transaction."""
    transaction_id: str
    block_number: int
    gas_used: int
    status: int
    contract_address: Optional[str] = None
    raw: Any = None

    @property
    def succeeded(self) -> bool:
        return self.status == 1


def is_payable(function_abi: Optional[dict]) -> bool:
    """Return true if the abi entry accepts ether (missing constructors are not payable)."""
    if function_abi is None:
        return False
    if 'stateMutability' in function_abi:
        return function_abi['stateMutability'] == 'payable'
    return bool(function_abi.get('payable', False))


def is_read_only(function_abi: Optional[dict]) -> bool:
    if function_abi is None:
        return False
    if 'stateMutability' in function_abi:
        return function_abi['stateMutability'] in ('view', 'pure')
    return bool(function_abi.get('constant', False))
