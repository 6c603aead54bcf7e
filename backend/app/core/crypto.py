"""Encryption of DNS provider credentials at rest.

Blobs are AES-256-GCM: a random 12-byte nonce is prepended to the
ciphertext+tag and the whole thing is base64url encoded. The key is the
SHA-256 digest of ``ENCRYPTION_KEY`` so any secret length works.
"""
import base64
import binascii
import hashlib
import json
import os
from typing import Any, Dict

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from app.core.config import settings
from app.core.exceptions import CredentialError

NONCE_SIZE = 12


def _derive_key(secret: str) -> bytes:
    return hashlib.sha256(secret.encode("utf-8")).digest()


def encrypt_credentials(plaintext: str, secret: str = None) -> str:
    """Encrypt a credential string, returning an opaque token."""
    key = _derive_key(secret or settings.ENCRYPTION_KEY)
    nonce = os.urandom(NONCE_SIZE)
    ciphertext = AESGCM(key).encrypt(nonce, plaintext.encode("utf-8"), None)
    return base64.urlsafe_b64encode(nonce + ciphertext).decode("ascii")


def decrypt_credentials(token: str, secret: str = None) -> str:
    """Decrypt a token produced by :func:`encrypt_credentials`.

    Raises:
        CredentialError: malformed token, wrong key, or tampered data.
    """
    key = _derive_key(secret or settings.ENCRYPTION_KEY)
    try:
        raw = base64.urlsafe_b64decode(token.encode("ascii"))
    except (binascii.Error, ValueError, AttributeError) as e:
        raise CredentialError("cannot decrypt credentials") from e

    if len(raw) <= NONCE_SIZE:
        raise CredentialError("cannot decrypt credentials")

    try:
        plaintext = AESGCM(key).decrypt(raw[:NONCE_SIZE], raw[NONCE_SIZE:], None)
    except InvalidTag as e:
        raise CredentialError("cannot decrypt credentials") from e
    return plaintext.decode("utf-8")


def encrypt_credential_dict(credentials: Dict[str, Any]) -> str:
    return encrypt_credentials(json.dumps(credentials))


def decrypt_credential_dict(token: str) -> Dict[str, Any]:
    """Decrypt a token and parse it back into a credential mapping."""
    plaintext = decrypt_credentials(token)
    try:
        data = json.loads(plaintext)
    except json.JSONDecodeError as e:
        raise CredentialError("cannot decrypt credentials: payload is not JSON") from e
    if not isinstance(data, dict):
        raise CredentialError("cannot decrypt credentials: payload is not an object")
    return data
