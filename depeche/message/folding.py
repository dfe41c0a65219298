"""Header line folding (RFC 5322 section 2.2.3).

Long header values are split on spaces and continued on following
lines that start with a single space. Words are never broken, so a
word wider than the limit ends up on an over-long line of its own.
"""

# Recommended maximum line length, excluding CRLF
MAX_LINE_LENGTH = 78

CONTINUATION = "\r\n "


def fold_header(prefix: str, value: str, width: int = MAX_LINE_LENGTH) -> str:
    """Fold ``prefix + value`` into CRLF-terminated header lines.

    Example:
        fold_header("Subject: ", "a long subject ...")
        # "Subject: a long ...\\r\\n subject ...\\r\\n"

    Args:
        prefix: Start of the first line, normally "Field: ".
        value: Header value. Runs of spaces collapse to one.
        width: Maximum line length before a fold is inserted.

    Returns:
        The folded header, always ending in CRLF.
    """
    lines: list[str] = []
    line = prefix
    # The prefix already ends in a space, so the first word needs no separator
    separator = ""

    for word in value.split(" "):
        if not word:
            continue

        if len(line) + len(separator) + len(word) <= width:
            line += separator + word
        else:
            lines.append(line)
            line = word
        separator = " "

    lines.append(line)
    return CONTINUATION.join(lines) + "\r\n"
