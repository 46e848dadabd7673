"""Locale-aware string collation for call numbers and titles.

Sort keys follow the three-level comparison used by Unicode collation:
base letters first, then accents, then case (lower before upper).
"""

import unicodedata

# =============================================================================
# Unicode Normalization
# =============================================================================


def strip_diacritics(text: str) -> str:
    """Remove diacritical marks from text, preserving base characters.

    Uses NFKD normalization to decompose characters, then filters out
    combining marks. For example: "Ḥalab" -> "Halab", "Zoé" -> "Zoe".

    Punctuation and other non-combining characters are preserved.
    """
    nfkd = unicodedata.normalize("NFKD", text)
    return "".join(c for c in nfkd if not unicodedata.combining(c))


def normalize_for_comparison(text: str | None) -> str:
    """Normalize text for case-insensitive, diacritics-insensitive comparison.

    Strips diacritics and casefolds the text. Returns empty string for
    None or empty input.
    """
    if not text:
        return ""
    return strip_diacritics(text).casefold()


# =============================================================================
# Sort Keys
# =============================================================================


def collation_key(text: str | None) -> tuple[str, str, tuple[bool, ...]]:
    """Build a sort key that compares strings the way a locale collator does.

    Args:
        text: String to build the key for. None sorts like the empty string.

    Returns:
        Tuple of (primary, secondary, tertiary) comparison levels.
    """
    if not text:
        return ("", "", ())
    decomposed = unicodedata.normalize("NFKD", text)
    return (
        normalize_for_comparison(text),
        decomposed.casefold(),
        tuple(c.isupper() for c in decomposed if not unicodedata.combining(c)),
    )
