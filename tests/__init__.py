"""
Test suite for xsdkit

Contains:
- tests/unit/      : Unit tests for individual modules
- tests/fixtures/  : XML documents used by the binding tests
"""
