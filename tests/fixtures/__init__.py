"""
Test Fixtures and Utilities

Synthetic Firefly API payloads, transaction builders and fake mutation
adapters shared across the test suite.
"""
