"""Patient text handling for logs.

Free-text history is patient-identifiable. It must never be written to
logs raw; log its length and a fingerprint instead.
"""
import hashlib


def hash_text_for_audit(text: str) -> str:
    """Hash history text for the audit trail without exposing content.

    Identical text always yields the same fingerprint, so repeated
    analyses of one history can be correlated across log lines. Lone
    surrogates (valid in str, e.g. from a JSON "\\ud800" escape) are
    encoded as-is rather than raising.

    Args:
        text: Raw history text

    Returns:
        SHA-256 hex digest of the text
    """
    return hashlib.sha256(text.encode("utf-8", errors="surrogatepass")).hexdigest()
