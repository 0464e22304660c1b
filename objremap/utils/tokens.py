"""Line-oriented token helpers for the OBJ and MTL text formats."""

_WHITESPACE = " \t"


def first_token(line):
    r"""Return the leading non-whitespace run of ``line`` (``""`` if blank)."""
    stripped = line.lstrip(_WHITESPACE)
    for i, char in enumerate(stripped):
        if char in _WHITESPACE:
            return stripped[:i]
    return stripped.rstrip("\r\n")


def tail(line):
    r"""Return everything after the first token, trimmed of whitespace.

    Example:
        >>> tail("usemtl  red plastic \n")
        'red plastic'
    """
    stripped = line.lstrip(_WHITESPACE)
    token = first_token(stripped)
    return stripped[len(token):].strip(_WHITESPACE + "\r\n")


def split(text, delimiter):
    r"""Split ``text`` on the literal ``delimiter``, keeping empty fields.

    Consecutive delimiters yield empty strings, so positional access stays
    valid (``"1//3"`` gives ``["1", "", "3"]``). An empty ``text`` gives an
    empty list.
    """
    if not delimiter:
        raise ValueError("delimiter must be a non-empty string.")
    if not text:
        return []
    return text.split(delimiter)


def fields(text):
    r"""Split ``text`` on runs of whitespace, dropping empty fields."""
    return text.split()


def resolve_index(token, size):
    r"""Convert a 1-based (or negative, end-relative) OBJ index to 0-based.

    Args:
        token (str): Index as written in the file.
        size (int): Length of the referenced buffer at the time the line is
            parsed. A negative index counts back from this size, so ``-1`` is
            the most recently added element.

    Returns:
        (int): 0-based index. It is not range-checked here.

    Raises:
        ValueError: if ``token`` is not an integer.
    """
    idx = int(token)
    if idx < 0:
        return size + idx
    return idx - 1
