"""Unit tests for the credential cipher."""
import pytest

from app.core.crypto import (
    decrypt_credential_dict,
    decrypt_credentials,
    encrypt_credential_dict,
    encrypt_credentials,
)
from app.core.exceptions import CredentialError


class TestCredentialCipher:
    """Tests for encrypting provider credentials at rest."""

    @pytest.mark.parametrize("credentials", [
        {"apiToken": "cf-token-123"},
        {"apiKey": "global-key", "email": "ops@example.com"},
        {"accessKeyId": "LTAI5t", "accessKeySecret": "s3cr3t/+="},
        {"note": "unicode 阿里云 ✓"},
    ])
    def test_round_trip(self, credentials):
        """Decrypting an encrypted blob yields the original mapping."""
        assert decrypt_credential_dict(encrypt_credential_dict(credentials)) == credentials

    def test_ciphertext_hides_plaintext(self):
        token = encrypt_credentials('{"apiToken": "very-secret-token"}')
        assert "very-secret-token" not in token

    def test_nonce_is_random(self):
        """Two encryptions of the same input differ."""
        assert encrypt_credentials("same") != encrypt_credentials("same")

    def test_wrong_key_fails(self):
        token = encrypt_credentials("payload", secret="key-one")
        with pytest.raises(CredentialError):
            decrypt_credentials(token, secret="key-two")

    def test_tampered_token_fails(self):
        token = encrypt_credentials("payload")
        tampered = token[:-4] + ("AAAA" if not token.endswith("AAAA") else "BBBB")
        with pytest.raises(CredentialError):
            decrypt_credentials(tampered)

    @pytest.mark.parametrize("token", ["", "not base64 !!!", "c2hvcnQ="])
    def test_malformed_token_fails(self, token):
        with pytest.raises(CredentialError):
            decrypt_credentials(token)

    def test_non_object_payload_rejected(self):
        token = encrypt_credentials('["a", "b"]')
        with pytest.raises(CredentialError):
            decrypt_credential_dict(token)
