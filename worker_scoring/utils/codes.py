"""Helpers for comma-separated code lists.

Licensure and jurisdiction codes travel as comma-separated strings
(e.g. ``"RN,LPN"``). Matching is exact and case-sensitive, so segments are
never trimmed or case-folded here.
"""

from typing import FrozenSet, Iterable, Optional, Union

CODE_SEPARATOR = ","


def split_codes(codes: Optional[str]) -> FrozenSet[str]:
    """Split a comma-separated code string into a set of codes.

    Empty segments are discarded, so ``""``, ``None`` and ``",,"`` all yield
    an empty set. Whitespace is significant: ``"RN, LPN"`` yields
    ``{"RN", " LPN"}``.

    Args:
        codes: Comma-separated code string (or None)

    Returns:
        Frozen set of non-empty segments

    Examples:
        >>> sorted(split_codes("RN,LPN"))
        ['LPN', 'RN']
        >>> split_codes(",,")
        frozenset()
    """
    if not codes:
        return frozenset()
    return frozenset(segment for segment in codes.split(CODE_SEPARATOR) if segment)


def join_codes(codes: Union[str, Iterable[str], None]) -> str:
    """Coerce a code string or an iterable of codes into the comma-separated form.

    Args:
        codes: Either an already-joined string, an iterable of codes, or None

    Returns:
        Comma-separated string ("" for None)
    """
    if codes is None:
        return ""
    if isinstance(codes, str):
        return codes
    return CODE_SEPARATOR.join(codes)
