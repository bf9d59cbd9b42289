"""
Program Estimator Package

Estimates the price of a custom educational program from duration,
headcount and optional add-ons using a table-driven multiplier formula.
"""

__version__ = "1.0.0"
