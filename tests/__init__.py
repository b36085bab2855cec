"""
Test suite for Producer Library

Contains:
- tests/unit/          : Unit tests for individual modules and the Marketplace facade
"""
