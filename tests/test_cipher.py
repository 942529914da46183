"""Tests for payload encryption."""

import pytest
from cryptography.exceptions import InvalidTag

from ledgerstore.crypto import AesGcmCipher, generate_key
from ledgerstore.errors import CipherError, ConfigurationError, EncodingError
from ledgerstore.persistence.cipher import Cipher, PayloadCipher


class ReverseCipher:
    """Toy cipher that reverses its input."""

    def __init__(self) -> None:
        self.calls = 0

    def encrypt(self, data: bytes) -> bytes:
        self.calls += 1
        return data[::-1]

    def decrypt(self, data: bytes) -> bytes:
        self.calls += 1
        return data[::-1]


class FailingCipher:
    def encrypt(self, data: bytes) -> bytes:
        raise RuntimeError("hsm offline")

    def decrypt(self, data: bytes) -> bytes:
        raise RuntimeError("hsm offline")


class TestAesGcmCipher:
    """Tests for AesGcmCipher."""

    def test_round_trip(self) -> None:
        """Decrypting what was encrypted should return the plaintext exactly."""
        cipher = AesGcmCipher(generate_key())
        plaintext = b'{"card": "4111"}\x00tail'
        assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext

    def test_ciphertexts_differ_per_call(self) -> None:
        """Every encryption should use a fresh nonce."""
        cipher = AesGcmCipher(generate_key())
        assert cipher.encrypt(b"same") != cipher.encrypt(b"same")

    def test_wrong_key_rejected(self) -> None:
        """Another key should fail authentication."""
        ciphertext = AesGcmCipher(generate_key()).encrypt(b"secret")
        with pytest.raises(InvalidTag):
            AesGcmCipher(generate_key()).decrypt(ciphertext)

    def test_short_ciphertext_rejected(self) -> None:
        """Data shorter than a nonce cannot be decrypted."""
        with pytest.raises(ValueError):
            AesGcmCipher(generate_key()).decrypt(b"short")

    @pytest.mark.parametrize("size", [0, 8, 31, 33])
    def test_bad_key_size_rejected(self, size: int) -> None:
        """Only AES-128/192/256 keys are accepted."""
        with pytest.raises(ConfigurationError):
            AesGcmCipher(b"k" * size)

    def test_satisfies_cipher_protocol(self) -> None:
        assert isinstance(AesGcmCipher(generate_key()), Cipher)


class TestPayloadCipher:
    """Tests for PayloadCipher."""

    def test_encrypt_row_hex_encodes(self) -> None:
        """The payload column should hold hex ciphertext afterwards."""
        row = {"uuid": "e1", "data_bytes": "abc"}
        PayloadCipher(ReverseCipher()).encrypt_row(row)
        assert row["data_bytes"] == b"cba".hex()
        assert row["uuid"] == "e1"

    def test_round_trip(self) -> None:
        """encrypt_row then decrypt_row should restore the payload."""
        adapter = PayloadCipher(AesGcmCipher(generate_key()))
        row = {"data_bytes": b'{"amount": 10}'}
        adapter.encrypt_row(row)
        adapter.decrypt_row(row)
        assert row["data_bytes"] == b'{"amount": 10}'

    def test_non_utf8_payload_round_trips(self) -> None:
        """Arbitrary bytes should reach the cipher and come back unchanged."""
        cipher = ReverseCipher()
        adapter = PayloadCipher(cipher)
        row = {"data_bytes": b"\xff\xfe\x00\x01"}
        adapter.encrypt_row(row)
        assert row["data_bytes"] == "0100feff"
        adapter.decrypt_row(row)
        assert row["data_bytes"] == b"\xff\xfe\x00\x01"
        assert cipher.calls == 2

    def test_empty_payload_never_reaches_cipher(self) -> None:
        """Encrypting an empty payload should fail without calling the cipher."""
        cipher = ReverseCipher()
        with pytest.raises(CipherError, match="payload is empty"):
            PayloadCipher(cipher).encrypt_row({"data_bytes": ""})
        assert cipher.calls == 0

    def test_missing_cipher_fails(self) -> None:
        """An adapter without a cipher should never pass data through."""
        adapter = PayloadCipher(None)
        assert not adapter.enabled
        with pytest.raises(CipherError):
            adapter.encrypt_row({"data_bytes": "abc"})
        with pytest.raises(CipherError):
            adapter.decrypt_row({"data_bytes": "616263"})

    def test_invalid_hex_fails(self) -> None:
        """Stored text that is not hex should be an encoding error."""
        with pytest.raises(EncodingError):
            PayloadCipher(ReverseCipher()).decrypt_row({"data_bytes": "not hex"})

    def test_empty_ciphertext_fails(self) -> None:
        with pytest.raises(CipherError):
            PayloadCipher(ReverseCipher()).decrypt_row({"data_bytes": ""})

    def test_cipher_failure_wrapped(self) -> None:
        """Exceptions from the cipher should surface as CipherError with the cause."""
        with pytest.raises(CipherError) as exc_info:
            PayloadCipher(FailingCipher()).encrypt_row({"data_bytes": "abc"})
        assert isinstance(exc_info.value.cause, RuntimeError)

        with pytest.raises(CipherError):
            PayloadCipher(FailingCipher()).decrypt_row({"data_bytes": "616263"})
