"""
Shared test fixtures.
"""
