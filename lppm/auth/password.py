# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
WordPress-compatible password verification.

Admin accounts live in the WordPress users table, so login has to accept
every hash format WordPress has written over the years:

- unhashed values (imported accounts whose password was never hashed)
- ``$wp$`` prefixed bcrypt (WordPress 6.8+)
- raw MD5 hex digests (very old installs)
- PHPass portable hashes (``$P$`` / ``$H$``)
- anything else PHP crypt() understands: plain bcrypt from bcrypt plugins,
  MD5-crypt and SHA-crypt

Assumptions:
- Verification only, this system never writes password hashes
- All comparisons of secrets are constant-time
- Malformed hashes verify as False, nothing is raised to the caller
- All lengths and offsets are in bytes (UTF-8), like PHP's strlen/substr
"""
import hashlib
import hmac
from typing import Optional, Union

import bcrypt
from passlib.hash import md5_crypt, sha256_crypt, sha512_crypt

from lppm.config import settings

ITOA64 = b"./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

MIN_COUNT_LOG2 = 7
MAX_COUNT_LOG2 = 30

WP_BCRYPT_PREFIX = b"$wp$"
BCRYPT_PREFIX = b"$2"

# Schemes PHP crypt() verifies that can be longer than 32 bytes
CRYPT_SCHEMES = (md5_crypt, sha256_crypt, sha512_crypt)


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def encode64(data: bytes, count: int) -> str:
    """Encode bytes with the PHPass base64 variant.

    This is not RFC 4648 base64: bits are packed little-endian, six at a
    time, and the final partial group stops early. 16 input bytes give 22
    output characters.

    Args:
        data: Bytes to encode
        count: Number of bytes of ``data`` to encode

    Returns:
        str: Encoded string over the ITOA64 alphabet
    """
    output = bytearray()
    i = 0
    while True:
        value = data[i]
        i += 1
        output.append(ITOA64[value & 0x3F])
        if i < count:
            value |= data[i] << 8
        output.append(ITOA64[(value >> 6) & 0x3F])
        if i >= count:
            break
        i += 1
        if i < count:
            value |= data[i] << 16
        output.append(ITOA64[(value >> 12) & 0x3F])
        if i >= count:
            break
        i += 1
        output.append(ITOA64[(value >> 18) & 0x3F])
        if i >= count:
            break
    return output.decode("ascii")


def crypt_portable(
    password: Union[str, bytes],
    setting: Union[str, bytes],
    max_count_log2: Optional[int] = None
) -> Optional[bytes]:
    """Compute a PHPass portable hash for ``password`` using ``setting``.

    Only the first 12 bytes of ``setting`` are used: ``$``, ``P`` or ``H``,
    one byte, the iteration exponent and an 8 byte salt. Anything after
    that (a previously computed digest) is ignored.

    Args:
        password: Plain text password
        setting: Stored hash or bare settings string
        max_count_log2: Highest accepted iteration exponent. Defaults to
            settings.password_max_count_log2, never above 30.

    Returns:
        bytes: ``setting[:12]`` followed by the 22 character digest, or
        None when ``setting`` is not a usable portable hash.
    """
    password = _to_bytes(password)
    setting = _to_bytes(setting)

    if max_count_log2 is None:
        max_count_log2 = settings.password_max_count_log2
    max_count_log2 = min(max_count_log2, MAX_COUNT_LOG2)

    if len(setting) < 12 or setting[0:1] != b"$" or setting[1:2] not in (b"P", b"H"):
        return None

    count_log2 = ITOA64.find(setting[3:4])
    if count_log2 < MIN_COUNT_LOG2 or count_log2 > max_count_log2:
        return None

    salt = setting[4:12]
    if len(salt) != 8:
        return None

    digest = hashlib.md5(salt + password).digest()
    for _ in range(1 << count_log2):
        digest = hashlib.md5(digest + password).digest()

    return setting[:12] + encode64(digest, 16).encode("ascii")


def _checkpw(password: bytes, bcrypt_hash: bytes) -> bool:
    try:
        return bcrypt.checkpw(password, bcrypt_hash)
    except ValueError:
        # Malformed hash body, or a password bcrypt refuses (over 72 bytes)
        return False


def _verify_wp_bcrypt(password: bytes, password_hash: bytes) -> bool:
    # "$wp$2y$10$..." -> "$2y$10$..."
    return _checkpw(password, b"$" + password_hash[len(WP_BCRYPT_PREFIX):])


def verify_crypt(password: bytes, password_hash: bytes) -> bool:
    """Check a hash the way PHP's crypt() would.

    Covers plain ``$2a$``/``$2b$``/``$2y$`` bcrypt and the ``$1$``,
    ``$5$`` and ``$6$`` crypt schemes. Anything else does not match.
    """
    if password_hash.startswith(BCRYPT_PREFIX):
        return _checkpw(password, password_hash)

    try:
        stored = password_hash.decode("ascii")
    except UnicodeDecodeError:
        return False

    for scheme in CRYPT_SCHEMES:
        if scheme.identify(stored):
            try:
                return scheme.verify(password, stored)
            except (ValueError, TypeError):
                return False
    return False


def verify_password(password: Union[str, bytes], password_hash: Union[str, bytes]) -> bool:
    """Verify a password against a stored WordPress ``user_pass`` value.

    Args:
        password: Plain text password to verify
        password_hash: Stored hash to check against

    Returns:
        bool: True if password matches, False otherwise

    Assumptions:
    - First matching format wins: plaintext, $wp$ bcrypt, MD5, PHPass,
      then crypt() schemes for hashes that are not portable hashes
    - A wrong password and a corrupt hash both return False
    """
    if not password or not password_hash:
        return False

    password = _to_bytes(password)
    password_hash = _to_bytes(password_hash)

    if hmac.compare_digest(password_hash, password):
        return True

    if password_hash.startswith(WP_BCRYPT_PREFIX):
        return _verify_wp_bcrypt(password, password_hash)

    if len(password_hash) <= 32:
        md5_hex = hashlib.md5(password).hexdigest().encode("ascii")
        return hmac.compare_digest(password_hash, md5_hex)

    computed = crypt_portable(password, password_hash)
    if computed is None:
        return verify_crypt(password, password_hash)

    return hmac.compare_digest(password_hash, computed)
