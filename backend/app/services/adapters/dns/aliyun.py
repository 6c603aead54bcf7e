"""Aliyun (Alibaba Cloud) DNS adapter using the Alidns RPC API."""
import base64
import hashlib
import hmac
import uuid
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional, Tuple
from urllib.parse import quote

import httpx
import structlog

from app.core.config import settings
from app.core.exceptions import CredentialError, ProviderError, ProviderTimeoutError
from app.services.adapters.base import DNSProviderAdapter, RecordSpec, RemoteRecord

logger = structlog.get_logger()

API_VERSION = "2015-01-09"
DEFAULT_TTL = 600


def split_fqdn(full_domain: str) -> Tuple[str, str]:
    """Split a fully-qualified name into (root domain, RR label).

    The last two labels are taken as the root domain and the rest as the
    record label ("@" for the apex). Multi-label public suffixes such as
    ``example.co.uk`` are split wrongly; this is a known limitation.
    """
    parts = full_domain.rstrip(".").split(".")
    if len(parts) < 2:
        raise ProviderError(f"invalid domain format: {full_domain}")
    root = ".".join(parts[-2:])
    rr = ".".join(parts[:-2]) or "@"
    return root, rr


def _percent_encode(value: str) -> str:
    return quote(str(value), safe="~")


def sign_request(params: Dict[str, str], access_key_secret: str, method: str = "GET") -> str:
    """Compute the signature v1 (HMAC-SHA1) for an RPC request."""
    canonical = "&".join(
        f"{_percent_encode(k)}={_percent_encode(v)}" for k, v in sorted(params.items())
    )
    string_to_sign = f"{method}&{_percent_encode('/')}&{_percent_encode(canonical)}"
    digest = hmac.new(
        f"{access_key_secret}&".encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha1
    ).digest()
    return base64.b64encode(digest).decode("utf-8")


class AliyunAdapter(DNSProviderAdapter):
    """Adapter for Alidns. Aliyun has no proxy concept; ``proxied`` is always False."""

    name = "aliyun"

    def __init__(
        self,
        credentials: Dict[str, Any],
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None
    ):
        self.access_key_id = credentials.get("accessKeyId")
        self._access_key_secret = credentials.get("accessKeySecret")
        if not self.access_key_id or not self._access_key_secret:
            raise CredentialError("Aliyun credentials must include accessKeyId and accessKeySecret")

        self._client = http_client or httpx.Client(
            base_url=settings.ALIYUN_DNS_ENDPOINT,
            timeout=timeout or settings.DNS_PROVIDER_TIMEOUT
        )

    def close(self) -> None:
        self._client.close()

    def _call(self, action: str, **action_params: Any) -> Dict[str, Any]:
        """Invoke an RPC action and return the decoded JSON body."""
        params = {
            "Format": "JSON",
            "Version": API_VERSION,
            "AccessKeyId": self.access_key_id,
            "SignatureMethod": "HMAC-SHA1",
            "SignatureVersion": "1.0",
            "SignatureNonce": uuid.uuid4().hex,
            "Timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "Action": action,
        }
        params.update({k: str(v) for k, v in action_params.items() if v is not None})
        params["Signature"] = sign_request(params, self._access_key_secret)

        try:
            response = self._client.get("/", params=params)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(f"aliyun {action} timed out") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"aliyun {action}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            raise ProviderError(f"aliyun {action}: HTTP {response.status_code}")

        if not isinstance(data, dict):
            raise ProviderError(f"aliyun {action}: malformed response")

        if response.is_error:
            raise ProviderError(f"aliyun {action}: {data.get('Code')} {data.get('Message', '')}".strip())
        return data

    @staticmethod
    def _nested_list(data: Dict[str, Any], outer: str, inner: str) -> List[Dict[str, Any]]:
        """Pull ``data[outer][inner]`` out of a listing response, e.g. DomainRecords.Record."""
        container = data.get(outer) or {}
        items = container.get(inner) if isinstance(container, dict) else None
        if items is None:
            return []
        if not isinstance(items, list):
            raise ProviderError(f"aliyun: malformed response, expected a list at {outer}.{inner}")
        return [item for item in items if isinstance(item, dict)]

    @staticmethod
    def _to_record(raw: Dict[str, Any]) -> RemoteRecord:
        rr = raw.get("RR", "")
        domain_name = raw.get("DomainName", "")
        name = domain_name if rr in ("", "@") else f"{rr}.{domain_name}"
        return RemoteRecord(
            id=str(raw.get("RecordId") or ""),
            name=name,
            type=raw.get("Type") or "A",
            value=raw.get("Value", ""),
            ttl=raw.get("TTL"),
            proxied=False
        )

    def create_record(self, root_domain: str, record: RecordSpec) -> RemoteRecord:
        domain_name, rr = split_fqdn(record.name)
        ttl = record.ttl or DEFAULT_TTL
        data = self._call(
            "AddDomainRecord",
            DomainName=domain_name,
            RR=rr,
            Type=record.type,
            Value=record.value,
            TTL=ttl
        )
        return RemoteRecord(
            id=str(data.get("RecordId") or ""),
            name=record.name,
            type=record.type,
            value=record.value,
            ttl=ttl,
            proxied=False
        )

    def update_record(self, root_domain: str, record_id: str, record: RecordSpec) -> RemoteRecord:
        # UpdateDomainRecord needs RR, Type and Value together
        if not (record.name and record.type and record.value):
            current = self.get_record(root_domain, record_id)
            record = RecordSpec(
                name=record.name or current.name,
                type=record.type or current.type,
                value=record.value or current.value,
                ttl=record.ttl or current.ttl,
            )

        _, rr = split_fqdn(record.name)
        self._call(
            "UpdateDomainRecord",
            RecordId=record_id,
            RR=rr,
            Type=record.type,
            Value=record.value,
            TTL=record.ttl
        )
        return RemoteRecord(
            id=record_id,
            name=record.name,
            type=record.type,
            value=record.value,
            ttl=record.ttl,
            proxied=False
        )

    def delete_record(self, root_domain: str, record_id: str) -> None:
        self._call("DeleteDomainRecord", RecordId=record_id)

    def get_record(self, root_domain: str, record_id: str) -> RemoteRecord:
        data = self._call("DescribeDomainRecordInfo", RecordId=record_id)
        if not data.get("RecordId"):
            raise ProviderError(f"record not found: {record_id}")
        return self._to_record(data)

    def list_records(self, root_domain: str, record_type: Optional[str] = None) -> List[RemoteRecord]:
        records = []
        page = 1
        page_size = 500
        while True:
            data = self._call(
                "DescribeDomainRecords",
                DomainName=root_domain,
                TypeKeyWord=record_type,
                PageNumber=page,
                PageSize=page_size
            )
            batch = self._nested_list(data, "DomainRecords", "Record")
            records.extend(self._to_record(r) for r in batch)
            try:
                total = int(data.get("TotalCount") or 0)
            except (TypeError, ValueError):
                total = 0
            if page * page_size >= total or not batch:
                break
            page += 1
        return records

    def list_domains(self) -> List[str]:
        try:
            data = self._call("DescribeDomains", PageNumber=1, PageSize=100)
            domains = self._nested_list(data, "Domains", "Domain")
        except ProviderError as e:
            logger.warning("Aliyun domain listing failed", error=e.message)
            return []
        return [d["DomainName"] for d in domains if d.get("DomainName")]

    def validate_credentials(self) -> bool:
        try:
            self._call("DescribeDomains", PageNumber=1, PageSize=1)
            return True
        except ProviderError as e:
            logger.info("Aliyun credential check failed", error=e.message)
            return False
