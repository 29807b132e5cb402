"""Cache key generation — deterministic content hashes."""

from __future__ import annotations

_MASK = 0xFFFFFFFF
_SIGN_BIT = 0x80000000


def content_hash(text: str) -> int:
    """Signed 32-bit polynomial hash of a string's UTF-16 code units.

    Same value as Java's ``String.hashCode``, so cache file names are stable
    across processes (unlike the salted built-in ``hash``).
    """
    h = 0
    data = text.encode("utf-16-be", errors="surrogatepass")
    for i in range(0, len(data), 2):
        unit = (data[i] << 8) | data[i + 1]
        h = (31 * h + unit) & _MASK
    return h - (1 << 32) if h & _SIGN_BIT else h


def page_file_name(document_text: str) -> str:
    """File name of the browser page cached for a whole document."""
    return f"remder-{content_hash(document_text)}.html"
