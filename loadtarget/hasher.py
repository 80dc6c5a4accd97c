"""CPU-bound synthetic work: SHA-256 over freshly generated random bytes."""

from __future__ import annotations

import hashlib
import os

CHUNK_SIZE = 1024


def hash_random_data(bytes_to_process: int) -> str:
    """Hash random 1KB chunks until at least ``bytes_to_process`` bytes are consumed.

    The total may overshoot by up to one chunk. Values below 1 are treated
    as 1, so at least one chunk is always hashed.

    Returns:
        Lowercase hex SHA-256 digest of everything hashed.
    """
    bytes_to_process = max(1, bytes_to_process)
    hasher = hashlib.sha256()

    processed = 0
    while processed < bytes_to_process:
        hasher.update(os.urandom(CHUNK_SIZE))
        processed += CHUNK_SIZE

    return hasher.hexdigest()
