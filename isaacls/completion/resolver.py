from __future__ import annotations

import dataclasses
from typing import Any

from isaacls.completion.candidates import Candidate

# Detail for payloads that cannot be turned into text
UNKNOWN_DETAIL = ""


def resolve_detail(payload: Any) -> str:
    """
    Compute the detail string for a candidate payload.

    Integers are shown as their value, namespace names are echoed.
    Anything else (missing or mangled by the client) gives UNKNOWN_DETAIL.
    """
    if isinstance(payload, bool):
        return UNKNOWN_DETAIL
    if isinstance(payload, int):
        return str(payload)
    # Some JSON clients send integral numbers back as floats
    if isinstance(payload, float) and payload.is_integer():
        return str(int(payload))
    if isinstance(payload, str):
        return payload
    return UNKNOWN_DETAIL


def resolve_candidate(candidate: Candidate) -> Candidate:
    """Get a copy of the candidate with its detail attached."""
    return dataclasses.replace(candidate, detail=resolve_detail(candidate.payload))
