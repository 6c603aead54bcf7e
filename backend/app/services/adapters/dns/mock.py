"""Mock DNS adapter for testing and local development."""
import uuid
from typing import List, Dict, Any, Optional, Iterable

from app.core.exceptions import ProviderError
from app.services.adapters.base import DNSProviderAdapter, RecordSpec, RemoteRecord, PROXIABLE_TYPES


class MockDNSAdapter(DNSProviderAdapter):
    """In-memory adapter. Operations named in ``fail_on`` raise ProviderError."""

    name = "mock"

    def __init__(
        self,
        credentials: Optional[Dict[str, Any]] = None,
        domains: Iterable[str] = ("example.com",),
        fail_on: Iterable[str] = (),
        valid_credentials: bool = True
    ):
        self.credentials = credentials or {}
        self.domains = list(domains)
        self.fail_on = set(fail_on)
        self.valid_credentials = valid_credentials
        self.records: Dict[str, RemoteRecord] = {}
        self.calls: List[str] = []
        self.closed = False

    def _track(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise ProviderError(f"mock {operation} failure")

    def create_record(self, root_domain: str, record: RecordSpec) -> RemoteRecord:
        self._track("create_record")
        remote = RemoteRecord(
            id=uuid.uuid4().hex,
            name=record.name,
            type=record.type,
            value=record.value,
            ttl=record.ttl,
            proxied=bool(record.proxied) if record.type in PROXIABLE_TYPES else False
        )
        self.records[remote.id] = remote
        return remote

    def update_record(self, root_domain: str, record_id: str, record: RecordSpec) -> RemoteRecord:
        self._track("update_record")
        if record_id not in self.records:
            raise ProviderError(f"record not found: {record_id}")
        current = self.records[record_id]
        for field in ("name", "type", "value", "ttl", "proxied"):
            new_value = getattr(record, field)
            if new_value is not None:
                setattr(current, field, new_value)
        return current

    def delete_record(self, root_domain: str, record_id: str) -> None:
        self._track("delete_record")
        self.records.pop(record_id, None)

    def get_record(self, root_domain: str, record_id: str) -> RemoteRecord:
        self._track("get_record")
        if record_id not in self.records:
            raise ProviderError(f"record not found: {record_id}")
        return self.records[record_id]

    def list_records(self, root_domain: str, record_type: Optional[str] = None) -> List[RemoteRecord]:
        self._track("list_records")
        return [
            r for r in self.records.values()
            if r.name.endswith(root_domain) and (record_type is None or r.type == record_type)
        ]

    def list_domains(self) -> List[str]:
        try:
            self._track("list_domains")
        except ProviderError:
            return []
        return list(self.domains)

    def validate_credentials(self) -> bool:
        self.calls.append("validate_credentials")
        return self.valid_credentials

    def close(self) -> None:
        self.closed = True
