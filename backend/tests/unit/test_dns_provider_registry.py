"""Unit tests for the admin-managed DNS provider registry."""
import pytest

from app.core.exceptions import UnsupportedProviderError, ValidationError
from app.db.models.dns_account import DnsAccount, DnsProviderType
from app.db.models.dns_provider import DnsProvider
from app.services import dns_accounts, dns_providers


class TestProviderCatalogue:
    """Tests for listing and seeding."""

    def test_defaults_without_rows(self, db_session):
        providers = {p["type"]: p for p in dns_providers.list_providers(db_session)}

        assert set(providers) == {"cloudflare", "aliyun"}
        assert providers["cloudflare"]["display_name"] == "Cloudflare"
        assert providers["cloudflare"]["is_active"] is True
        assert "apiToken" in providers["cloudflare"]["credential_schema"]["properties"]

    def test_initialize_is_idempotent(self, db_session):
        assert dns_providers.initialize_providers(db_session) == 2
        assert dns_providers.initialize_providers(db_session) == 0
        assert db_session.query(DnsProvider).count() == 2

    def test_account_counts(self, db_session, dns_account):
        providers = {p["type"]: p for p in dns_providers.list_providers(db_session)}
        assert providers["cloudflare"]["account_count"] == 1
        assert providers["aliyun"]["account_count"] == 0

    def test_active_only_hides_disabled(self, db_session):
        dns_providers.update_provider(db_session, "aliyun", is_active=False)

        active = dns_providers.list_providers(db_session, active_only=True)
        assert [p["type"] for p in active] == ["cloudflare"]
        assert len(dns_providers.list_providers(db_session)) == 2


class TestUpdateProvider:
    """Tests for admin edits."""

    def test_rename_and_edit_schema(self, db_session):
        schema = {"one_of": [["apiToken"]], "properties": {"apiToken": "Scoped token"}}

        info = dns_providers.update_provider(
            db_session, DnsProviderType.CLOUDFLARE, display_name="  Cloudflare DNS ", credential_schema=schema
        )

        assert info["display_name"] == "Cloudflare DNS"
        assert info["credential_schema"] == schema
        assert db_session.get(DnsProvider, DnsProviderType.CLOUDFLARE).display_name == "Cloudflare DNS"

    def test_alias_resolves(self, db_session):
        info = dns_providers.update_provider(db_session, "AliyunDNS", is_active=False)
        assert info["type"] == "aliyun"
        assert dns_providers.is_provider_enabled(db_session, "aliyun") is False

    def test_blank_display_name_rejected(self, db_session):
        with pytest.raises(ValidationError):
            dns_providers.update_provider(db_session, "cloudflare", display_name="   ")
        assert db_session.query(DnsProvider).count() == 0

    def test_unknown_provider(self, db_session):
        with pytest.raises(UnsupportedProviderError):
            dns_providers.update_provider(db_session, "route53", is_active=False)


class TestDisabledProvider:
    """Disabling a provider blocks new accounts only."""

    def test_create_account_refused(self, db_session, mock_provider):
        dns_providers.update_provider(db_session, "cloudflare", is_active=False)

        with pytest.raises(UnsupportedProviderError, match="disabled"):
            dns_accounts.create_account(db_session, "CF", "cloudflare", {"apiToken": "t"})

        assert mock_provider.calls == []
        assert db_session.query(DnsAccount).count() == 0

    def test_re_enabled_provider_accepts_accounts(self, db_session, mock_provider):
        dns_providers.update_provider(db_session, "cloudflare", is_active=False)
        dns_providers.update_provider(db_session, "cloudflare", is_active=True)

        account = dns_accounts.create_account(db_session, "CF", "cloudflare", {"apiToken": "t"})
        assert account.provider_type == DnsProviderType.CLOUDFLARE

    def test_existing_accounts_keep_working(self, db_session, dns_account, mock_provider):
        dns_providers.update_provider(db_session, "cloudflare", is_active=False)

        assert dns_accounts.list_provider_domains(db_session, dns_account.account_id) == [
            "example.com", "example.org"
        ]
