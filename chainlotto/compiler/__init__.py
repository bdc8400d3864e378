"""
This package contains the solidity compilation glue.

===========
Subpackages
===========
* :py:mod:`.solidity`: Interface to solc
"""
