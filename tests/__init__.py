"""
Test suite for the luggage calculation engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
