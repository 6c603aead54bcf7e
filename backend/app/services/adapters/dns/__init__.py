"""DNS provider adapters package."""
from app.services.adapters.dns.cloudflare import CloudflareAdapter
from app.services.adapters.dns.aliyun import AliyunAdapter
from app.services.adapters.dns.mock import MockDNSAdapter
from app.services.adapters.dns.factory import PROVIDER_INFO, create_dns_provider, parse_provider_type

__all__ = [
    "CloudflareAdapter",
    "AliyunAdapter",
    "MockDNSAdapter",
    "create_dns_provider",
    "PROVIDER_INFO",
    "parse_provider_type",
]
