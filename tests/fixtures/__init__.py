"""
Test Fixtures and Utilities

Shared test data and generators for ledger tests.

This module provides:
- Seeded random ledger generation
- Helpers for building balance graphs by hand
"""
