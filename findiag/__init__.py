"""
findiag — Financial statement diagnosis service.

Computes standard accounting ratios from a company's figures, compares them
with industry averages and returns a risk diagnosis.
"""

__version__ = "0.1.0"
