"""
This package contains internal helper functionality.

==========
Submodules
==========
* :py:mod:`.helpers`: File and unit conversion helpers
* :py:mod:`.progress_printer`: Colored terminal output
* :py:mod:`.timer`: Time measurement which is logged to the DATA log
"""
