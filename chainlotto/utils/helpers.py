import os
import re
from decimal import Decimal, InvalidOperation
from typing import Optional, List, Union

ID_PATTERN = r'[a-zA-Z$_][a-zA-Z0-9$_]*'
CONTRACT_PATTERN = re.compile(rf'\b(?:abstract\s+)?contract\s+({ID_PATTERN})\s*(?:is\s+[^{{]*)?{{')

WEI_PER_ETHER = 10 ** 18


def save_to_file(output_directory: Optional[str], filename: str, code: str):
    if output_directory is not None:
        target = os.path.join(output_directory, filename)
    else:
        target = filename
    with open(target, "w") as f:
        f.write(code)
    return target


def read_file(filename: str):
    with open(filename, 'r') as f:
        return f.read()


def get_contract_names(sol_filename: str) -> List[str]:
    """Return the names of all contracts declared in sol_filename (in order of declaration)."""
    return [m.group(1) for m in CONTRACT_PATTERN.finditer(read_file(sol_filename))]


def parse_ether(amount: Union[str, int, Decimal]) -> int:
    """
    Convert an ether amount into wei.

    >>> parse_ether("0.01")
    10000000000000000
    """
    try:
        wei = Decimal(str(amount)) * WEI_PER_ETHER
    except InvalidOperation as e:
        raise ValueError(f'Invalid ether amount {amount!r}') from e
    if not wei.is_finite():
        raise ValueError(f'Invalid ether amount {amount!r}')
    if wei != wei.to_integral_value():
        raise ValueError(f'Ether amount {amount} has more than 18 decimals')
    return int(wei)


def format_ether(wei: int) -> str:
    """Inverse of parse_ether, without trailing zeros."""
    s = format(Decimal(wei) / WEI_PER_ETHER, 'f')
    return s.rstrip('0').rstrip('.') if '.' in s else s
