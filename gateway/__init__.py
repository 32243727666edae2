"""Tezos chain adapter for the multi-chain gateway."""

__version__ = "0.1.0"
