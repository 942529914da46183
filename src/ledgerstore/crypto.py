"""AES-GCM authenticated encryption for stored payloads.

Uses the ``cryptography`` library's AESGCM primitive with a random
12-byte nonce per encryption. The ciphertext format is::

    nonce ‖ ciphertext ‖ tag

where *nonce* is 12 bytes, and the 16-byte authentication tag is
appended by AESGCM automatically. The store hex-encodes the result.
"""

from __future__ import annotations

import os

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ledgerstore.errors import ConfigurationError

_NONCE_SIZE = 12  # 96-bit nonce recommended by NIST for AES-GCM
_KEY_SIZES = (16, 24, 32)


def generate_key() -> bytes:
    """Generate a random 256-bit (32-byte) AES key."""
    return AESGCM.generate_key(bit_length=256)


class AesGcmCipher:
    """Cipher implementation backed by AES-GCM.

    Identical plaintexts produce different ciphertexts because every call
    draws a fresh nonce.
    """

    def __init__(self, key: bytes) -> None:
        if len(key) not in _KEY_SIZES:
            raise ConfigurationError(f"AES key must be 16, 24 or 32 bytes, got {len(key)}")
        self._aesgcm = AESGCM(key)

    def encrypt(self, data: bytes) -> bytes:
        nonce = os.urandom(_NONCE_SIZE)
        return nonce + self._aesgcm.encrypt(nonce, data, None)

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt data produced by :meth:`encrypt`.

        Raises:
            ValueError: If the data is too short to hold a nonce
            cryptography.exceptions.InvalidTag: If the key is wrong or
                the data has been tampered with
        """
        if len(data) <= _NONCE_SIZE:
            raise ValueError("ciphertext is too short")
        nonce = data[:_NONCE_SIZE]
        return self._aesgcm.decrypt(nonce, data[_NONCE_SIZE:], None)
