"""
Test Suite for storefin

Test Structure:
- fixtures/: Synthetic daily records and helpers
- unit/: Unit tests mirroring src/ package structure
- integration/: End-to-end workflow tests

Test Data:
All daily records are synthetic; no real store data is included in tests.
"""
