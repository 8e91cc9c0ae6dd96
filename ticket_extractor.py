"""Find the Redmine ticket number referenced in a chat message."""

from __future__ import annotations

from typing import Optional

TICKET_MARKER = "#"
# Largest id Redmine (and a signed 64-bit column) can hold.
MAX_TICKET_ID = 2**63 - 1


def extract_ticket_id(text: str) -> Optional[int]:
    """Return the number following the first ``#`` in ``text``.

    Only the first marker is considered: ``"foo#abc #12"`` yields ``None``.
    Any Unicode decimal digit counts, so full-width digits are accepted.
    """
    if not text:
        return None
    pos = text.find(TICKET_MARKER)
    if pos < 0:
        return None

    end = pos + 1
    while end < len(text) and text[end].isdecimal():
        end += 1
    digits = text[pos + 1 : end]
    if not digits:
        return None

    try:
        ticket_id = int(digits)
    except ValueError:
        # Runs past the interpreter's int-string limit.
        return None
    if ticket_id > MAX_TICKET_ID:
        return None
    return ticket_id
