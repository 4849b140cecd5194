# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Admin bearer tokens.

Assumptions:
- Tokens are SHA-256 hex digests (64 characters) minted at login
- Tokens are not persisted; the admin gate only checks their shape
"""
import hashlib
import secrets
import string
import time

TOKEN_LENGTH = 64
_RANDOM_ALPHABET = string.ascii_letters + string.digits
_HEX_DIGITS = frozenset(string.hexdigits)


def issue_token(user_id: int) -> str:
    """Mint a bearer token for a freshly authenticated admin.

    Args:
        user_id: WordPress user ID

    Returns:
        str: 64 character lowercase hex token
    """
    nonce = "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(40))
    seed = f"{nonce}{user_id}{time.time()}"
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()


def is_well_formed_token(token: str) -> bool:
    """Check that a token looks like one issued by issue_token.

    Args:
        token: Bearer token from the Authorization header

    Returns:
        bool: True for exactly 64 hex characters (either case)
    """
    return len(token) == TOKEN_LENGTH and all(c in _HEX_DIGITS for c in token)
