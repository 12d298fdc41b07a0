"""Monetary domain package.

This package contains classes for handling monetary amounts and currencies:
Currency definitions, rounding modes and the exact, currency-safe MonetaryAmount
with its allocation algorithm.
"""
