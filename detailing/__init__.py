"""Pricing and slot availability core for the detailing booking site."""

__version__ = "0.1.0"
