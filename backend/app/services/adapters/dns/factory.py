"""DNS provider factory - the single place mapping provider types to adapters."""
from typing import Dict, Any, Union

from app.core.exceptions import UnsupportedProviderError
from app.db.models.dns_account import DnsProviderType
from app.services.adapters.base import DNSProviderAdapter
from app.services.adapters.dns.aliyun import AliyunAdapter
from app.services.adapters.dns.cloudflare import CloudflareAdapter

PROVIDER_ALIASES = {
    "aliyundns": DnsProviderType.ALIYUN,
}

PROVIDER_INFO = {
    DnsProviderType.CLOUDFLARE: {
        "display_name": "Cloudflare",
        "credential_schema": {
            "one_of": [["apiToken"], ["apiKey", "email"]],
            "properties": {
                "apiToken": "Cloudflare API Token (recommended)",
                "apiKey": "Global API Key",
                "email": "Account e-mail used with the Global API Key",
            },
        },
    },
    DnsProviderType.ALIYUN: {
        "display_name": "阿里云 DNS",
        "credential_schema": {
            "one_of": [["accessKeyId", "accessKeySecret"]],
            "properties": {
                "accessKeyId": "AccessKey ID",
                "accessKeySecret": "AccessKey Secret",
            },
        },
    },
}


def parse_provider_type(provider_type: Union[str, DnsProviderType]) -> DnsProviderType:
    """Resolve a provider type string (case-insensitive, aliases allowed)."""
    if isinstance(provider_type, DnsProviderType):
        return provider_type
    key = str(provider_type).strip().lower()
    if key in PROVIDER_ALIASES:
        return PROVIDER_ALIASES[key]
    try:
        return DnsProviderType(key)
    except ValueError:
        raise UnsupportedProviderError(f"unsupported DNS provider: {provider_type}")


def create_dns_provider(
    provider_type: Union[str, DnsProviderType],
    credentials: Dict[str, Any]
) -> DNSProviderAdapter:
    """Build an adapter from plaintext credentials. No network I/O."""
    kind = parse_provider_type(provider_type)

    if kind == DnsProviderType.CLOUDFLARE:
        return CloudflareAdapter(credentials)
    elif kind == DnsProviderType.ALIYUN:
        return AliyunAdapter(credentials)
    raise UnsupportedProviderError(f"unsupported DNS provider: {provider_type}")
