"""Unified command-line interface for splitscan.

Usage:
    splitscan parse receipt.txt
    splitscan parse - --json < receipt.txt
    splitscan decode '{"id": "TXN1", "items": [...]}'
    splitscan serve [--host] [--port]
"""
