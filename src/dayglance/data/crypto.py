from __future__ import annotations

import os
from dataclasses import dataclass, field

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..domain.errors import ConfigurationError, DecryptionError

IV_LENGTH = 12
MIN_TAG_LENGTH = 12


@dataclass(frozen=True)
class TitleCipher:
    """AES-256-GCM for stored titles in ``iv:authTag:content`` hex form.

    The key is passed in at construction; tests build one with a fixed key.
    """

    key_hex: str
    _key: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.key_hex or len(self.key_hex) != 64:
            raise ConfigurationError("ENCRYPTION_KEY must be a 64-character hex string.")
        try:
            key = bytes.fromhex(self.key_hex)
        except ValueError as exc:
            raise ConfigurationError("ENCRYPTION_KEY must be a 64-character hex string.") from exc
        object.__setattr__(self, "_key", key)

    def encrypt(self, plaintext: str) -> str:
        iv = os.urandom(IV_LENGTH)
        encryptor = Cipher(algorithms.AES(self._key), modes.GCM(iv)).encryptor()
        content = encryptor.update(plaintext.encode("utf-8")) + encryptor.finalize()
        return f"{iv.hex()}:{encryptor.tag.hex()}:{content.hex()}"

    def decrypt(self, ciphertext: str) -> str:
        parts = ciphertext.split(":")
        if len(parts) != 3:
            raise DecryptionError("expected iv:authTag:content")
        try:
            iv, tag, content = (bytes.fromhex(part) for part in parts)
        except ValueError as exc:
            raise DecryptionError("ciphertext is not hex encoded") from exc
        if len(iv) != IV_LENGTH:
            raise DecryptionError(f"invalid IV length, expected {IV_LENGTH}, got {len(iv)}")
        if not MIN_TAG_LENGTH <= len(tag) <= 16:
            raise DecryptionError(f"auth tag must be {MIN_TAG_LENGTH}-16 bytes, got {len(tag)}")
        decryptor = Cipher(
            algorithms.AES(self._key),
            modes.GCM(iv, tag, min_tag_length=MIN_TAG_LENGTH),
        ).decryptor()
        try:
            raw = decryptor.update(content) + decryptor.finalize()
        except InvalidTag as exc:
            raise DecryptionError("authentication tag mismatch") from exc
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecryptionError("plaintext is not valid UTF-8") from exc
