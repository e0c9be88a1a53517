"""Deterministic chat room identifiers."""

from __future__ import annotations

import hashlib
from typing import Final

# 32 hex characters keep 128 bits of the SHA-256 digest and stay far below
# document-store key size limits regardless of identifier length.
ROOM_ID_LENGTH: Final[int] = 32


def derive_room_id(participant_a: str, participant_b: str, listing_id: str) -> str:
    """Return the room key for two participants chatting about a listing.

    The participants are sorted before hashing, so the result does not depend
    on which side opens the conversation.

    Args:
        participant_a: Subject identifier of one participant.
        participant_b: Subject identifier of the other participant.
        listing_id: Identifier of the listing the conversation is about.

    Returns:
        A lowercase hexadecimal string of ``ROOM_ID_LENGTH`` characters.

    Raises:
        ValueError: If any identifier is empty.
    """
    if not participant_a or not participant_b:
        raise ValueError("Participant identifiers must be non-empty")
    if not listing_id:
        raise ValueError("Listing identifier must be non-empty")

    first, second = sorted((participant_a, participant_b))
    material = f"{first}_{second}_{listing_id}".encode()
    return hashlib.sha256(material).hexdigest()[:ROOM_ID_LENGTH]
