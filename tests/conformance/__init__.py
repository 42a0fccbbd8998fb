"""Conformance tests: lock semantics of the host filesystem."""
