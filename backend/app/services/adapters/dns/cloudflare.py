"""Cloudflare DNS adapter (API v4)."""
from typing import List, Dict, Any, Optional
import httpx
import structlog

from app.core.config import settings
from app.core.exceptions import CredentialError, ProviderError, ProviderTimeoutError
from app.services.adapters.base import DNSProviderAdapter, RecordSpec, RemoteRecord, PROXIABLE_TYPES

logger = structlog.get_logger()


class CloudflareAdapter(DNSProviderAdapter):
    """Adapter for the Cloudflare v4 REST API.

    Accepts either an API token (``apiToken``) or a legacy global key
    (``apiKey`` + ``email``). Zone ids are looked up by root domain and
    cached for the lifetime of the instance.
    """

    name = "cloudflare"
    PAGE_SIZE = 100

    def __init__(
        self,
        credentials: Dict[str, Any],
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None
    ):
        api_token = credentials.get("apiToken")
        api_key = credentials.get("apiKey")
        email = credentials.get("email")

        if api_token:
            self.auth_mode = "token"
            headers = {"Authorization": f"Bearer {api_token}"}
        elif api_key and email:
            self.auth_mode = "global_key"
            headers = {"X-Auth-Key": api_key, "X-Auth-Email": email}
        else:
            raise CredentialError(
                "Cloudflare credentials must include either apiToken or (apiKey + email)"
            )

        headers["Content-Type"] = "application/json"
        self._client = http_client or httpx.Client(
            base_url=settings.CLOUDFLARE_API_BASE,
            timeout=timeout or settings.DNS_PROVIDER_TIMEOUT
        )
        self._headers = headers
        self._zone_cache: Dict[str, str] = {}

    def close(self) -> None:
        self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Send a request and unwrap the Cloudflare response envelope."""
        try:
            response = self._client.request(
                method, path, params=params, json=json_data, headers=self._headers
            )
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(f"cloudflare {method} {path} timed out") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"cloudflare {method} {path}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            raise ProviderError(f"cloudflare {method} {path}: HTTP {response.status_code}")

        if not isinstance(data, dict):
            raise ProviderError(f"cloudflare: malformed response from {method} {path}")

        if response.is_error or not data.get("success", False):
            errors = data.get("errors")
            first = errors[0] if isinstance(errors, list) and errors else None
            if isinstance(first, dict) and first.get("message"):
                message = first["message"]
            else:
                message = f"HTTP {response.status_code}"
            raise ProviderError(f"cloudflare: {message}")

        return data

    @staticmethod
    def _result_list(data: Dict[str, Any]) -> List[Dict[str, Any]]:
        result = data.get("result") or []
        if not isinstance(result, list):
            raise ProviderError("cloudflare: malformed response, expected a result list")
        return [item for item in result if isinstance(item, dict)]

    @staticmethod
    def _total_pages(data: Dict[str, Any]) -> int:
        info = data.get("result_info")
        if not isinstance(info, dict):
            return 1
        try:
            return int(info.get("total_pages") or 1)
        except (TypeError, ValueError):
            return 1

    def _get_zone_id(self, root_domain: str) -> str:
        if root_domain in self._zone_cache:
            return self._zone_cache[root_domain]

        data = self._request("GET", "/zones", params={"name": root_domain})
        zones = self._result_list(data)
        if not zones:
            raise ProviderError(f"zone not found for domain: {root_domain}")

        zone_id = zones[0].get("id")
        if not zone_id:
            raise ProviderError(f"cloudflare: malformed zone entry for {root_domain}")
        self._zone_cache[root_domain] = zone_id
        return zone_id

    @staticmethod
    def _to_record(raw: Any, fallback_name: str = "") -> RemoteRecord:
        if not isinstance(raw, dict):
            raise ProviderError("cloudflare: malformed response, missing record result")
        return RemoteRecord(
            id=str(raw.get("id") or ""),
            name=raw.get("name") or fallback_name,
            type=raw.get("type", ""),
            value=str(raw.get("content", "")),
            ttl=raw.get("ttl"),
            proxied=bool(raw.get("proxied", False))
        )

    def create_record(self, root_domain: str, record: RecordSpec) -> RemoteRecord:
        zone_id = self._get_zone_id(root_domain)
        payload = {
            "type": record.type,
            "name": record.name,
            "content": record.value,
            "ttl": record.ttl or settings.DEFAULT_RECORD_TTL,
        }
        if record.type in PROXIABLE_TYPES and record.proxied is not None:
            payload["proxied"] = record.proxied

        data = self._request("POST", f"/zones/{zone_id}/dns_records", json_data=payload)
        return self._to_record(data.get("result"), record.name)

    def update_record(self, root_domain: str, record_id: str, record: RecordSpec) -> RemoteRecord:
        zone_id = self._get_zone_id(root_domain)
        payload: Dict[str, Any] = {}
        if record.name:
            payload["name"] = record.name
        if record.type:
            payload["type"] = record.type
        if record.value:
            payload["content"] = record.value
        if record.ttl:
            payload["ttl"] = record.ttl
        if record.type in PROXIABLE_TYPES and record.proxied is not None:
            payload["proxied"] = record.proxied

        data = self._request(
            "PATCH", f"/zones/{zone_id}/dns_records/{record_id}", json_data=payload
        )
        return self._to_record(data.get("result"), record.name or "")

    def delete_record(self, root_domain: str, record_id: str) -> None:
        zone_id = self._get_zone_id(root_domain)
        self._request("DELETE", f"/zones/{zone_id}/dns_records/{record_id}")

    def get_record(self, root_domain: str, record_id: str) -> RemoteRecord:
        zone_id = self._get_zone_id(root_domain)
        data = self._request("GET", f"/zones/{zone_id}/dns_records/{record_id}")
        return self._to_record(data.get("result"))

    def list_records(self, root_domain: str, record_type: Optional[str] = None) -> List[RemoteRecord]:
        zone_id = self._get_zone_id(root_domain)
        records = []
        page = 1
        while True:
            params = {"page": page, "per_page": self.PAGE_SIZE}
            if record_type:
                params["type"] = record_type
            data = self._request("GET", f"/zones/{zone_id}/dns_records", params=params)
            records.extend(self._to_record(r) for r in self._result_list(data))

            total_pages = self._total_pages(data)
            if page >= total_pages:
                break
            page += 1
        return records

    def list_domains(self) -> List[str]:
        domains = []
        page = 1
        try:
            while True:
                data = self._request("GET", "/zones", params={"page": page, "per_page": 50})
                domains.extend(z["name"] for z in self._result_list(data) if z.get("name"))

                total_pages = self._total_pages(data)
                if page >= total_pages:
                    break
                page += 1
        except ProviderError as e:
            logger.warning("Cloudflare zone listing failed", error=e.message)
            return []
        return domains

    def validate_credentials(self) -> bool:
        path = "/user/tokens/verify" if self.auth_mode == "token" else "/user"
        try:
            self._request("GET", path)
            return True
        except ProviderError as e:
            logger.info("Cloudflare credential check failed", auth_mode=self.auth_mode, error=e.message)
            return False
