"""
EPF Passbook - structured records from EPFO member passbooks.

Recovers member details, the contribution table, balance summary, taxable
data and roll-up insights from the text of a passbook PDF.
"""

__version__ = "0.1.0"
