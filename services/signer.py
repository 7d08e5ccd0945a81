# services/signer.py
"""
Ed25519 signing identity for Sui.

Address:   blake2b-256(0x00 || pubkey)
Signature: base64(0x00 || sig || pubkey), sig over blake2b-256(00 00 00 || tx_bytes)
"""

import base64
import binascii
import hashlib
import os
from typing import Mapping, Optional

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

ED25519_FLAG = 0x00
TRANSACTION_INTENT = bytes([0, 0, 0])


def _blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


class Ed25519Signer:
    def __init__(self, private_key: Ed25519PrivateKey):
        self._key = private_key
        self.public_key = private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
        self.address = "0x" + _blake2b_256(bytes([ED25519_FLAG]) + self.public_key).hex()

    @classmethod
    def from_seed(cls, seed: bytes) -> "Ed25519Signer":
        return cls(Ed25519PrivateKey.from_private_bytes(seed))

    def sign_transaction(self, tx_bytes_b64: str) -> str:
        tx_bytes = base64.b64decode(tx_bytes_b64)
        digest = _blake2b_256(TRANSACTION_INTENT + tx_bytes)
        signature = self._key.sign(digest)
        return base64.b64encode(bytes([ED25519_FLAG]) + signature + self.public_key).decode()

    def __repr__(self) -> str:
        return f"Ed25519Signer(address={self.address})"


def parse_private_key(raw: str) -> bytes:
    """
    Accepts a 32-byte hex seed (with or without 0x) or a base64 keystore
    entry (32 bytes, or 33 bytes with a leading Ed25519 flag).
    """
    value = raw.strip()

    hex_value = value[2:] if value.startswith("0x") else value
    if len(hex_value) == 64:
        try:
            return bytes.fromhex(hex_value)
        except ValueError:
            pass

    try:
        decoded = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("SUI_PRIVATE_KEY is neither hex nor base64")

    if len(decoded) == 33:
        if decoded[0] != ED25519_FLAG:
            raise ValueError("Only Ed25519 keys are supported")
        return decoded[1:]
    if len(decoded) == 32:
        return decoded
    raise ValueError(f"Unexpected private key length: {len(decoded)} bytes")


def get_signer(env: Optional[Mapping[str, str]] = None) -> Ed25519Signer:
    """
    Build the signing identity from SUI_PRIVATE_KEY.
    """
    source = os.environ if env is None else env
    raw = source.get("SUI_PRIVATE_KEY")
    if not raw:
        raise ValueError("SUI_PRIVATE_KEY is not set")
    return Ed25519Signer.from_seed(parse_private_key(raw))
