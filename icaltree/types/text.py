"""Library for decoding TEXT values."""

UNESCAPE_CHAR = {"\\\\": "\\", "\\;": ";", "\\,": ",", "\\N": "\n", "\\n": "\n"}


def unescape_text(value: str) -> str:
    """Decode the backslash escapes of an rfc5545 TEXT value."""
    if "\\" not in value:
        return value
    result = []
    pos = 0
    while pos < len(value):
        pair = value[pos : pos + 2]
        if (char := UNESCAPE_CHAR.get(pair)) is not None:
            result.append(char)
            pos += 2
            continue
        result.append(value[pos])
        pos += 1
    return "".join(result)
