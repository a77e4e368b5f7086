"""
Test suite for chain-conformance

Contains:
- tests/unit/          : Unit tests for individual modules
"""
