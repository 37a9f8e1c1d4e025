"""
Test suite for the constant-product exchange pool

Contains:
- tests/unit/          : Unit tests for individual modules and pool scenarios
"""
