"""
Test suite for numeric-core

Contains:
- tests/unit/          : Unit tests for individual modules
"""
