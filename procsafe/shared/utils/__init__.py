"""Shared utilities for the procedure safety tool."""
from .pii import hash_text_for_audit

__all__ = ["hash_text_for_audit"]
