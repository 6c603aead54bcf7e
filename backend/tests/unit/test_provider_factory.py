"""Unit tests for provider type dispatch."""
import pytest

from app.core.exceptions import UnsupportedProviderError
from app.db.models.dns_account import DnsProviderType
from app.services.adapters.dns.aliyun import AliyunAdapter
from app.services.adapters.dns.cloudflare import CloudflareAdapter
from app.services.adapters.dns.factory import (
    create_dns_provider,
    PROVIDER_INFO,
    parse_provider_type,
)


class TestProviderFactory:

    @pytest.mark.parametrize("raw,expected", [
        ("cloudflare", DnsProviderType.CLOUDFLARE),
        ("Cloudflare", DnsProviderType.CLOUDFLARE),
        ("aliyun", DnsProviderType.ALIYUN),
        ("aliyundns", DnsProviderType.ALIYUN),
        (DnsProviderType.ALIYUN, DnsProviderType.ALIYUN),
    ])
    def test_parse_provider_type(self, raw, expected):
        assert parse_provider_type(raw) == expected

    def test_unknown_provider(self):
        with pytest.raises(UnsupportedProviderError, match="unsupported DNS provider: route53"):
            parse_provider_type("route53")

    def test_creates_matching_adapter(self):
        with create_dns_provider("cloudflare", {"apiToken": "t"}) as provider:
            assert isinstance(provider, CloudflareAdapter)
        with create_dns_provider("aliyundns", {"accessKeyId": "a", "accessKeySecret": "b"}) as provider:
            assert isinstance(provider, AliyunAdapter)

    def test_builtin_metadata_describes_credentials(self):
        assert set(PROVIDER_INFO) == {DnsProviderType.CLOUDFLARE, DnsProviderType.ALIYUN}
        assert "apiToken" in PROVIDER_INFO[DnsProviderType.CLOUDFLARE]["credential_schema"]["properties"]
        assert "accessKeySecret" in PROVIDER_INFO[DnsProviderType.ALIYUN]["credential_schema"]["properties"]
