"""
This package contains the exceptions which may be raised by public chainlotto interfaces.

==========
Submodules
==========
* :py:mod:`.exceptions`: Contract client error taxonomy and error reports
"""
