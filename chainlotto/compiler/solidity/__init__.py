"""
This package contains the interface to the solidity compiler.

==========
Submodules
==========
* :py:mod:`.compiler`: Compile solidity files using the solc json interface (via py-solc-x)
"""
