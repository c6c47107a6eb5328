"""Seed pattern detection and matching for Solana program derived addresses, with HTTP helpers."""

__version__ = "0.1.0"