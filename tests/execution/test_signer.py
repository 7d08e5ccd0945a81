import base64
import hashlib

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from services.signer import Ed25519Signer, get_signer, parse_private_key

SEED = bytes(range(32))


def test_address_is_blake2b_of_flag_and_pubkey():
    signer = Ed25519Signer.from_seed(SEED)

    expected = hashlib.blake2b(b"\x00" + signer.public_key, digest_size=32).hexdigest()
    assert signer.address == "0x" + expected
    assert len(signer.address) == 66


def test_signature_layout_and_validity():
    signer = Ed25519Signer.from_seed(SEED)
    tx_bytes = b"transaction-bytes"

    serialized = base64.b64decode(signer.sign_transaction(base64.b64encode(tx_bytes).decode()))

    assert len(serialized) == 1 + 64 + 32
    assert serialized[0] == 0x00
    assert serialized[65:] == signer.public_key

    digest = hashlib.blake2b(b"\x00\x00\x00" + tx_bytes, digest_size=32).digest()
    # raises InvalidSignature on mismatch
    Ed25519PublicKey.from_public_bytes(signer.public_key).verify(serialized[1:65], digest)


@pytest.mark.parametrize(
    "raw",
    [
        SEED.hex(),
        "0x" + SEED.hex(),
        base64.b64encode(SEED).decode(),
        base64.b64encode(b"\x00" + SEED).decode(),
    ],
)
def test_private_key_formats(raw):
    assert parse_private_key(raw) == SEED


def test_non_ed25519_keystore_entry_is_rejected():
    with pytest.raises(ValueError):
        parse_private_key(base64.b64encode(b"\x01" + SEED).decode())


def test_garbage_key_is_rejected():
    with pytest.raises(ValueError):
        parse_private_key("not a key!")


def test_get_signer_requires_key():
    with pytest.raises(ValueError):
        get_signer({})

    signer = get_signer({"SUI_PRIVATE_KEY": SEED.hex()})
    assert signer.address == Ed25519Signer.from_seed(SEED).address
