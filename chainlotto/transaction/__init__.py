"""
This package contains the contract client API and its backends.

==========
Submodules
==========
* :py:mod:`.artifacts`: Resolution of contract interfaces (abi and bytecode) by contract name
* :py:mod:`.interface`: Contract client interface definition
* :py:mod:`.runtime`: Provides global access to the configured client backend
* :py:mod:`.types`: Contract handles, pending transactions, receipts and addresses

===========
Subpackages
===========
* :py:mod:`.blockchain`: Contains the web3-based client backends
"""
