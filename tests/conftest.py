"""Pytest configuration for tests.

No sys.path hacks - tests should import from the installed strictschema package.
"""
