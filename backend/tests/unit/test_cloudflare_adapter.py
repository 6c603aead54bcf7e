"""Unit tests for the Cloudflare adapter against a mocked transport."""
import json
import httpx
import pytest

from app.core.exceptions import CredentialError, ProviderError, ProviderTimeoutError
from app.services.adapters.base import RecordSpec
from app.services.adapters.dns.cloudflare import CloudflareAdapter

BASE_URL = "https://api.cloudflare.com/client/v4"
ZONE = {"id": "zone-1", "name": "example.com"}


def ok(result, **extra):
    return httpx.Response(200, json={"success": True, "errors": [], "result": result, **extra})


def make_adapter(handler, credentials=None):
    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return CloudflareAdapter(credentials or {"apiToken": "token-abc"}, http_client=client)


class TestCloudflareAuth:
    """Tests for credential handling."""

    def test_token_uses_bearer_header(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            seen["path"] = request.url.path
            return ok({"status": "active"})

        adapter = make_adapter(handler)
        assert adapter.validate_credentials() is True
        assert seen["auth"] == "Bearer token-abc"
        assert seen["path"].endswith("/user/tokens/verify")

    def test_global_key_uses_auth_headers(self):
        seen = {}

        def handler(request):
            seen["x-auth-key"] = request.headers.get("X-Auth-Key")
            seen["x-auth-email"] = request.headers.get("X-Auth-Email")
            seen["path"] = request.url.path
            return ok({"id": "user-1"})

        adapter = make_adapter(handler, {"apiKey": "key-1", "email": "ops@example.com"})
        assert adapter.validate_credentials() is True
        assert seen["x-auth-key"] == "key-1"
        assert seen["x-auth-email"] == "ops@example.com"
        assert seen["path"].endswith("/user")

    def test_incomplete_credentials_rejected(self):
        with pytest.raises(CredentialError):
            CloudflareAdapter({"apiKey": "key-without-email"})

    def test_validate_returns_false_on_auth_error(self):
        def handler(request):
            return httpx.Response(403, json={"success": False, "errors": [{"code": 9109, "message": "Invalid access token"}]})

        assert make_adapter(handler).validate_credentials() is False


class TestCloudflareRecords:
    """Tests for record operations."""

    def test_create_record_looks_up_zone_and_posts(self):
        requests = []

        def handler(request):
            requests.append(request)
            if request.url.path.endswith("/zones"):
                assert request.url.params["name"] == "example.com"
                return ok([ZONE])
            body = json.loads(request.content)
            assert body == {"type": "A", "name": "blog.example.com", "content": "1.2.3.4", "ttl": 300, "proxied": True}
            return ok({"id": "rec-1", "name": "blog.example.com", "type": "A", "content": "1.2.3.4", "ttl": 300, "proxied": True})

        adapter = make_adapter(handler)
        remote = adapter.create_record(
            "example.com", RecordSpec(name="blog.example.com", type="A", value="1.2.3.4", ttl=300, proxied=True)
        )

        assert remote.id == "rec-1"
        assert remote.proxied is True
        assert requests[1].method == "POST"
        assert requests[1].url.path.endswith("/zones/zone-1/dns_records")

    def test_zone_id_is_cached(self):
        zone_lookups = []

        def handler(request):
            if request.url.path.endswith("/zones"):
                zone_lookups.append(request)
                return ok([ZONE])
            return ok({"id": "rec-1", "name": "a.example.com", "type": "A", "content": "1.1.1.1"})

        adapter = make_adapter(handler)
        adapter.get_record("example.com", "rec-1")
        adapter.delete_record("example.com", "rec-1")
        assert len(zone_lookups) == 1

    def test_unknown_zone_raises(self):
        adapter = make_adapter(lambda request: ok([]))
        with pytest.raises(ProviderError, match="zone not found"):
            adapter.get_record("missing.com", "rec-1")

    def test_update_sends_patch_with_given_fields(self):
        captured = {}

        def handler(request):
            if request.url.path.endswith("/zones"):
                return ok([ZONE])
            captured["method"] = request.method
            captured["body"] = json.loads(request.content)
            return ok({"id": "rec-1", "name": "blog.example.com", "type": "A", "content": "5.6.7.8", "proxied": False})

        adapter = make_adapter(handler)
        remote = adapter.update_record("example.com", "rec-1", RecordSpec(value="5.6.7.8", proxied=None))

        assert captured["method"] == "PATCH"
        assert captured["body"] == {"content": "5.6.7.8"}
        assert remote.value == "5.6.7.8"

    def test_api_error_message_is_surfaced(self):
        def handler(request):
            if request.url.path.endswith("/zones"):
                return ok([ZONE])
            return httpx.Response(400, json={"success": False, "errors": [{"code": 81057, "message": "Record already exists."}]})

        adapter = make_adapter(handler)
        with pytest.raises(ProviderError, match="Record already exists"):
            adapter.create_record("example.com", RecordSpec(name="a.example.com", type="A", value="1.1.1.1"))

    def test_timeout_raises_provider_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        adapter = make_adapter(handler)
        with pytest.raises(ProviderTimeoutError):
            adapter.get_record("example.com", "rec-1")

    def test_list_records_follows_pages(self):
        def handler(request):
            if request.url.path.endswith("/zones"):
                return ok([ZONE])
            page = int(request.url.params["page"])
            record = {"id": f"rec-{page}", "name": f"r{page}.example.com", "type": "A", "content": "1.1.1.1"}
            return ok([record], result_info={"page": page, "total_pages": 2})

        records = make_adapter(handler).list_records("example.com")
        assert [r.id for r in records] == ["rec-1", "rec-2"]


class TestCloudflareDomains:
    def test_list_domains(self):
        adapter = make_adapter(lambda request: ok([ZONE, {"id": "zone-2", "name": "example.org"}]))
        assert adapter.list_domains() == ["example.com", "example.org"]

    def test_list_domains_swallows_errors(self):
        adapter = make_adapter(lambda request: httpx.Response(500, text="oops"))
        assert adapter.list_domains() == []


class TestCloudflareMalformedResponses:
    """Unexpected JSON shapes surface as ProviderError."""

    def test_null_create_result_raises_provider_error(self):
        def handler(request):
            if request.url.path.endswith("/zones"):
                return ok([ZONE])
            return ok(None)

        adapter = make_adapter(handler)
        with pytest.raises(ProviderError, match="malformed"):
            adapter.create_record("example.com", RecordSpec(name="a.example.com", type="A", value="1.1.1.1"))

    def test_non_object_body_raises_provider_error(self):
        adapter = make_adapter(lambda request: httpx.Response(200, json=["unexpected"]))
        with pytest.raises(ProviderError, match="malformed"):
            adapter.get_record("example.com", "rec-1")

    def test_zone_entry_without_id_raises_provider_error(self):
        adapter = make_adapter(lambda request: ok([{"name": "example.com"}]))
        with pytest.raises(ProviderError, match="malformed zone"):
            adapter.delete_record("example.com", "rec-1")

    def test_non_list_record_listing_raises_provider_error(self):
        def handler(request):
            if request.url.path.endswith("/zones"):
                return ok([ZONE])
            return ok({"unexpected": True})

        with pytest.raises(ProviderError, match="malformed"):
            make_adapter(handler).list_records("example.com")

    def test_error_envelope_without_messages(self):
        adapter = make_adapter(lambda request: httpx.Response(400, json={"success": False, "errors": ["bad"]}))
        with pytest.raises(ProviderError, match="HTTP 400"):
            adapter.get_record("example.com", "rec-1")

    @pytest.mark.parametrize("body", [["unexpected"], {"success": True, "result": "zones"}])
    def test_list_domains_returns_empty_on_malformed_body(self, body):
        adapter = make_adapter(lambda request: httpx.Response(200, json=body))
        assert adapter.list_domains() == []
