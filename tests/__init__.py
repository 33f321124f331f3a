"""
Test Suite for the Group Ledger

Test Structure:
- fixtures/: Shared test data and generators
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI and end-to-end ledger tests

Test Categories:
- Core utilities (currency, money, models, config)
- Split allocation
- Balance aggregation
- Debt simplification

All test data is synthetic.
"""
