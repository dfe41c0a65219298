"""Data models for message construction."""

from dataclasses import dataclass

# MIME types used by the add_text_body / add_html_body shortcuts
TEXT_PLAIN = "text/plain; charset=utf-8"
TEXT_HTML = "text/html; charset=utf-8"


@dataclass(frozen=True)
class BodyPart:
    """One alternative representation of the message body.

    Parts are written in the order they were added, each under its own
    boundary with its own Content-Type.
    """

    mime_type: str  # Full Content-Type value, e.g. "text/plain; charset=utf-8"
    body_text: str
