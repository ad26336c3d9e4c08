"""
fincal
~~~~~~

Business-day arithmetic and bill due-date scheduling for personal finance.

Subpackages
-----------
fincal.calendar  Business-day queries and arithmetic (scalar and NumPy).
fincal.bills     Due-date rolling and business-day adjustment of bills.
"""

__version__ = "0.1.0"
