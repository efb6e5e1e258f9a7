"""
Test suite for amlich

Contains:
- tests/unit/          : Unit tests for individual modules
"""
