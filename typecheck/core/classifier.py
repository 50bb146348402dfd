from __future__ import annotations

# "----" already counts as a separator; pass min_length=5 for stricter matching.
MIN_SEPARATOR_LENGTH = 4


def is_separator_line(line: str, min_length: int = MIN_SEPARATOR_LENGTH) -> bool:
    """Return True for decorative lines such as ``----`` or ``# # # # #``.

    Whitespace is ignored. A separator is a single repeated symbol at
    least *min_length* characters long; lines starting with a letter or
    digit never qualify.
    """
    if not isinstance(line, str):
        return False
    stripped = "".join(line.split())
    if len(stripped) < min_length:
        return False
    first = stripped[0]
    if first.isalnum():
        return False
    return stripped == first * len(stripped)
