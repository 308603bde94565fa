"""Procedure safety services.

- Catalog Service: static, read-only reference content per procedure
- History Service: deterministic keyword rules over patient history
"""
