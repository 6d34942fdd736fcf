"""
Test suite for poker-payout-settlement

Contains:
- tests/unit/          : Unit tests for the engine, ledger, contracts and CLI
"""
