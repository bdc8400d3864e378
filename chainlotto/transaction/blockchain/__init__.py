"""
This package contains the blockchain interaction backends

==========
Submodules
==========
* :py:mod:`.web3py`: Contains several web3-based backends.
"""

from .web3py import Web3TesterBlockchain, Web3HttpGanacheBlockchain
from .web3py import Web3IpcBlockchain, Web3HttpBlockchain, Web3CustomBlockchain
