"""Message identifier derivation.

The identifier is the SHA-1 digest of a JSON dump of the whole message
state. It doubles as the MIME boundary token, so it only has to be
stable for identical messages and distinct for different ones; SHA-1 is
used for spread, not for security.
"""

import hashlib
import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from depeche.message import Message


def message_digest(message: "Message") -> str:
    """Return the 40-character hex identifier for the current message state."""
    state = {
        "to": message.to,
        "cc": message.cc,
        "bcc": message.bcc,
        "from": message.sender,
        "subject": message.subject,
        "bodies": [[part.mime_type, part.body_text] for part in message.bodies],
        "encoding": message.encoder.label(),
    }
    serialized = json.dumps(state, sort_keys=True, ensure_ascii=False)
    return hashlib.sha1(serialized.encode("utf-8")).hexdigest()
