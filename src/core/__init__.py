"""
Core domain models, numerical primitives, contracts and errors.

This package is independent of external systems (document stores, UI,
authentication) and only describes the data the engine consumes and produces.
"""
