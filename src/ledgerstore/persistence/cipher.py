"""Payload encryption for stored rows.

Only the ``data_bytes`` column is ever encrypted. The cipher sees the raw
payload bytes; ciphertext is stored as lowercase hex text so it fits the
TEXT column whatever the payload holds.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ledgerstore.errors import CipherError, EncodingError
from ledgerstore.persistence.converters import payload_to_bytes

PAYLOAD_COLUMN = "data_bytes"


@runtime_checkable
class Cipher(Protocol):
    """Injected encrypt/decrypt capability."""

    def encrypt(self, data: bytes) -> bytes: ...

    def decrypt(self, data: bytes) -> bytes: ...


class PayloadCipher:
    """Applies a :class:`Cipher` to the payload column of a row.

    Encryption is never skipped once a cipher is configured: an empty
    payload is an error, not a pass-through.
    """

    def __init__(self, cipher: Cipher | None, owner: str = "store") -> None:
        self._cipher = cipher
        self._owner = owner

    @property
    def enabled(self) -> bool:
        return self._cipher is not None

    def _require_cipher(self) -> Cipher:
        if self._cipher is None:
            raise CipherError(f"'{self._owner}' failed - cipher is not configured")
        return self._cipher

    def encrypt_row(self, row: dict[str, Any]) -> None:
        """Encrypt ``row['data_bytes']`` in place and hex-encode the result.

        Raises:
            CipherError: If no cipher is set, the payload is empty, or
                the cipher fails
        """
        cipher = self._require_cipher()
        plaintext = payload_to_bytes(row.get(PAYLOAD_COLUMN))
        if not plaintext:
            raise CipherError(f"'{self._owner}' failed - payload is empty")
        try:
            ciphertext = cipher.encrypt(plaintext)
        except Exception as e:
            raise CipherError(f"'{self._owner}' failed - failed to encrypt payload", cause=e) from e
        row[PAYLOAD_COLUMN] = bytes(ciphertext).hex()

    def decrypt_row(self, row: dict[str, Any]) -> None:
        """Hex-decode and decrypt ``row['data_bytes']`` in place, leaving raw bytes.

        Raises:
            EncodingError: If the stored text is not valid hex
            CipherError: If no cipher is set, the ciphertext is empty, or
                the cipher fails
        """
        cipher = self._require_cipher()
        try:
            ciphertext = bytes.fromhex(row.get(PAYLOAD_COLUMN) or "")
        except ValueError as e:
            raise EncodingError(f"'{self._owner}' failed - failed to decode hex payload", cause=e) from e
        if not ciphertext:
            raise CipherError(f"'{self._owner}' failed - encrypted payload is empty")
        try:
            plaintext = cipher.decrypt(ciphertext)
        except Exception as e:
            raise CipherError(f"'{self._owner}' failed - failed to decrypt payload", cause=e) from e
        row[PAYLOAD_COLUMN] = bytes(plaintext)
