"""
CLI command modules.
"""

from airdrop_cli.commands import root, prove, verify, demo

__all__ = ["root", "prove", "verify", "demo"]
