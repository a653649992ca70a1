"""Pricing and serviceability engine for residential waste-collection bids."""

__version__ = "1.0.0"
