"""Base adapter interfaces for DNS provider backends."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional

# Record types on which a Cloudflare-style proxy flag is meaningful
PROXIABLE_TYPES = ("A", "AAAA", "CNAME")


@dataclass
class RecordSpec:
    """Fields sent to a provider when creating or updating a record.

    ``None`` means "not specified" and is only legal for updates.
    """
    name: Optional[str] = None
    type: Optional[str] = None
    value: Optional[str] = None
    ttl: Optional[int] = None
    proxied: Optional[bool] = None


@dataclass
class RemoteRecord:
    """A DNS record as reported by a provider."""
    id: str
    name: str
    type: str
    value: str
    ttl: Optional[int] = None
    proxied: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class BaseAdapter(ABC):
    """Base class for all adapters."""

    @abstractmethod
    def test_connection(self) -> bool:
        """Test connection to the provider."""
        pass


class DNSProviderAdapter(BaseAdapter):
    """Uniform contract over third-party DNS APIs.

    Every method except ``list_domains`` and ``validate_credentials``
    raises ``ProviderError`` (or ``ProviderTimeoutError``) on failure.
    Adapters hold an HTTP client, so use them as context managers or
    call ``close()``.
    """

    name = "base"

    @abstractmethod
    def create_record(self, root_domain: str, record: RecordSpec) -> RemoteRecord:
        """Create a record. ``record.name`` is the fully-qualified name."""
        pass

    @abstractmethod
    def update_record(self, root_domain: str, record_id: str, record: RecordSpec) -> RemoteRecord:
        """Update the given fields of an existing record."""
        pass

    @abstractmethod
    def delete_record(self, root_domain: str, record_id: str) -> None:
        pass

    @abstractmethod
    def get_record(self, root_domain: str, record_id: str) -> RemoteRecord:
        pass

    @abstractmethod
    def list_records(self, root_domain: str, record_type: Optional[str] = None) -> List[RemoteRecord]:
        pass

    @abstractmethod
    def list_domains(self) -> List[str]:
        """
        List zones/domains visible to these credentials.

        Discovery aid only: never raises, returns [] on provider errors.
        """
        pass

    @abstractmethod
    def validate_credentials(self) -> bool:
        """Cheap read-only call proving the credentials work. Never raises."""
        pass

    def test_connection(self) -> bool:
        return self.validate_credentials()

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
