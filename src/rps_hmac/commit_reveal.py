from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Final, Sequence

from .protocol import EntropyUnavailableError, Move

KEY_BYTES: Final[int] = 32
DIGEST = hashlib.sha256


def generate_key(num_bytes: int = KEY_BYTES) -> str:
    # Hex so the player can paste the key straight into any HMAC tool.
    if num_bytes < KEY_BYTES:
        raise ValueError(f"key must be at least {KEY_BYTES} bytes, got {num_bytes}")
    try:
        raw = secrets.token_bytes(num_bytes)
    except (OSError, NotImplementedError) as exc:
        raise EntropyUnavailableError(f"secure random source unavailable: {exc}") from exc
    return raw.hex()


def choose_move(moves: Sequence[Move]) -> Move:
    # secrets.choice draws via randbelow, so every move is equally likely.
    try:
        return secrets.choice(moves)
    except (OSError, NotImplementedError) as exc:
        raise EntropyUnavailableError(f"secure random source unavailable: {exc}") from exc


def compute_commitment(*, key: str, move: Move) -> str:
    # The hex text of the key is the HMAC key, not the bytes it encodes.
    return hmac.new(key.encode("utf-8"), move.encode("utf-8"), DIGEST).hexdigest()


def verify_commitment(*, expected_commitment: str, key: str, move: Move) -> bool:
    expected = expected_commitment.strip().lower()
    if not expected.isascii():
        return False
    computed = compute_commitment(key=key, move=move)
    return secrets.compare_digest(expected, computed)
