"""
The main chainlotto package.

==========
Submodules
==========
* :py:mod:`.__main__`: Chainlotto command line interface
* :py:mod:`.config`: Global chainlotto configuration (both user-configuration as well as internal configuration)

===========
Subpackages
===========
* :py:mod:`.compiler`: Solidity compilation glue (solc)
* :py:mod:`.contracts`: Bundled solidity contracts used by the scripts
* :py:mod:`.errors`: Defines exceptions which may be raised by public chainlotto interfaces
* :py:mod:`.my_logging`: Logging facilities
* :py:mod:`.scripts`: Deploy-and-interact scripts
* :py:mod:`.transaction`: Contract client API (deployment, calls, transactions)
* :py:mod:`.utils`: Internal helper functionality
"""
