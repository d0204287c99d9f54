"""
Test Suite for the Firefly Reconciliator

Test Structure:
- fixtures/: Synthetic Firefly data and in-memory Firefly stand-ins
- unit/: Unit tests mirroring src/ package structure
- integration/: End-to-end CLI runs

Test Data:
All amounts, dates and account ids are synthetic.
"""
