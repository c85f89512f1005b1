"""
Airdrop CLI

Command-line interface for committing to airdrop lists and checking claims.

Usage:
    python -m airdrop_cli root entries.json
    python -m airdrop_cli prove entries.json --address 0x... --amount 55
    python -m airdrop_cli verify proof.json --address 0x... --amount 55
    python -m airdrop_cli demo
"""

__version__ = "0.1.0"
