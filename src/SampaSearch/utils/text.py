"""Diacritics normalization for accent-insensitive matching.

The stripped text is only ever used as a comparison key; callers keep the
original text for display.
"""

from __future__ import annotations

import unicodedata


def _base_char(char: str) -> str | None:
    """Return the comparison character for one code point.

    Standalone combining marks map to ``None``. A precomposed character maps
    to its single base letter; characters whose decomposition is not a single
    base letter (e.g. Hangul syllables) are kept unchanged so the plain text
    stays aligned with the original.
    """
    if unicodedata.category(char) == "Mn":
        return None
    decomposed = unicodedata.normalize("NFD", char)
    base = "".join(c for c in decomposed if unicodedata.category(c) != "Mn")
    if len(base) == 1:
        return base
    return char


def strip_diacritics(text: str) -> str:
    """Strip diacritical marks from text.

    For precomposed (NFC) input the result has exactly the same length as the
    input, so offsets into one are offsets into the other.

    Args:
        text: Input text.

    Returns:
        Text with combining marks removed and base letters kept.
    """
    out: list[str] = []
    for char in text:
        base = _base_char(char)
        if base is not None:
            out.append(base)
    return "".join(out)


def strip_with_offsets(text: str) -> tuple[str, list[int]]:
    """Strip diacritics and keep a map back into the original text.

    Args:
        text: Input text, precomposed or already decomposed.

    Returns:
        Tuple ``(plain, offsets)`` where ``offsets[i]`` is the index in
        ``text`` of ``plain[i]``. ``offsets`` has one extra trailing entry
        equal to ``len(text)`` so that match ends map directly; combining
        marks that trail a base letter are covered by the following offset.
    """
    plain: list[str] = []
    offsets: list[int] = []
    for idx, char in enumerate(text):
        base = _base_char(char)
        if base is None:
            continue
        plain.append(base)
        offsets.append(idx)
    offsets.append(len(text))
    return "".join(plain), offsets
