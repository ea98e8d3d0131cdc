"""
Test Fixtures and Utilities

Synthetic daily store records and generators shared by unit and
integration tests.
"""
