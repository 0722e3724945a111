"""Word-boundary detection and title casing for generated identifiers."""


def is_separator(ch: str) -> bool:
    """Report whether a character could mark a word boundary."""
    # ASCII alphanumerics and underscore are not separators
    if ord(ch) <= 0x7F:
        if "0" <= ch <= "9" or "a" <= ch <= "z" or "A" <= ch <= "Z":
            return False
        return ch != "_"
    if ch.isalpha() or ch.isdecimal():
        return False
    # Non-ASCII punctuation is not a boundary, only whitespace is
    return ch.isspace()


def _to_title(ch: str) -> str:
    titled = ch.title()
    # Characters like "ß" expand to several characters; keep them as-is
    if len(titled) != 1:
        return ch
    return titled


def title(s: str) -> str:
    """Title-case every character that follows a word boundary.

    The scan starts as if a space preceded the string, so the first character
    is always title-cased. Underscores and digits never start a new word:

        >>> title("my type")
        'My Type'
        >>> title("my_type")
        'My_type'
    """
    chars = []
    prev = " "
    for ch in s:
        if is_separator(prev):
            chars.append(_to_title(ch))
        else:
            chars.append(ch)
        prev = ch
    return "".join(chars)
