"""
Command Line Interface Package

Command-line access to the group ledger.

Command Structure:
- groupledger: Main entry point with utility commands (version, config, currencies)
- groupledger split: Preview how an expense divides between participants
- groupledger balances: Per-currency balances from a ledger file
- groupledger settle-up: Suggested payments from a ledger file
"""
