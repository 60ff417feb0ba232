"""
Test suites package.

Kept importable so page objects, fixtures and the unit fakes can be
referenced by dotted path (e.g. custom driver factories in the registry).
"""
