"""Integration tests for admin endpoints."""


class TestDnsAccountEndpoints:
    """Tests for /admin/dns-accounts."""

    def test_create_hides_credentials(self, client, auth_headers, mock_provider):
        response = client.post(
            "/api/v1/admin/dns-accounts",
            headers=auth_headers,
            json={"name": "CF", "provider_type": "cloudflare", "credentials": {"apiToken": "secret"}, "is_default": True}
        )
        assert response.status_code == 201
        data = response.json()
        assert data["provider_type"] == "cloudflare"
        assert data["is_default"] is True
        assert "credentials" not in data
        assert "encrypted_credentials" not in data

    def test_create_with_rejected_credentials(self, client, auth_headers, mock_provider):
        mock_provider.valid_credentials = False
        response = client.post(
            "/api/v1/admin/dns-accounts",
            headers=auth_headers,
            json={"name": "CF", "provider_type": "cloudflare", "credentials": {"apiToken": "bad"}}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "credential_error"

    def test_unsupported_provider(self, client, auth_headers, mock_provider):
        response = client.post(
            "/api/v1/admin/dns-accounts",
            headers=auth_headers,
            json={"name": "R53", "provider_type": "route53", "credentials": {"k": "v"}}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "unsupported_provider"

    def test_provider_domains(self, client, auth_headers, dns_account, mock_provider):
        response = client.get(f"/api/v1/admin/dns-accounts/{dns_account.account_id}/domains", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["domains"] == ["example.com", "example.org"]

    def test_delete_in_use(self, client, auth_headers, available_domain):
        response = client.delete(
            f"/api/v1/admin/dns-accounts/{available_domain.dns_account_id}", headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["code"] == "has_references"

    def test_missing_account(self, client, auth_headers):
        response = client.get("/api/v1/admin/dns-accounts/999", headers=auth_headers)
        assert response.status_code == 404


class TestAvailableDomainEndpoints:

    def test_create_uses_default_account(self, client, auth_headers, dns_account):
        response = client.post(
            "/api/v1/admin/available-domains", headers=auth_headers, json={"domain": "Example.NET"}
        )
        assert response.status_code == 201
        assert response.json()["domain"] == "example.net"
        assert response.json()["dns_account_id"] == dns_account.account_id

    def test_create_without_default_account(self, client, auth_headers):
        response = client.post(
            "/api/v1/admin/available-domains", headers=auth_headers, json={"domain": "example.net"}
        )
        assert response.status_code == 404

    def test_deactivated_domain_hidden_from_users(self, client, auth_headers, user_headers, available_domain):
        client.patch(
            f"/api/v1/admin/available-domains/{available_domain.available_domain_id}",
            headers=auth_headers,
            json={"is_active": False}
        )
        assert client.get("/api/v1/available-domains", headers=user_headers).json() == []
        assert len(client.get("/api/v1/admin/available-domains", headers=auth_headers).json()) == 1


class TestAdminDomainEndpoints:
    """Tests for /admin/domains."""

    def _pending_domain(self, client, auth_headers, user_headers, available_domain):
        client.put("/api/v1/admin/settings/default_domain_status", headers=auth_headers, json={"value": "pending"})
        response = client.post(
            "/api/v1/domains",
            headers=user_headers,
            json={
                "available_domain_id": available_domain.available_domain_id,
                "subdomain": "review",
                "record_type": "A",
                "value": "1.2.3.4"
            }
        )
        assert response.json()["status"] == "pending"
        return response.json()

    def test_approve(self, client, auth_headers, user_headers, available_domain, mock_provider):
        domain = self._pending_domain(client, auth_headers, user_headers, available_domain)

        response = client.patch(
            f"/api/v1/admin/domains/{domain['domain_id']}/status", headers=auth_headers, json={"status": "active"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "active"

    def test_failed_approval_returns_rejected(self, client, auth_headers, user_headers, available_domain, mock_provider):
        domain = self._pending_domain(client, auth_headers, user_headers, available_domain)
        mock_provider.fail_on = {"create_record"}

        response = client.patch(
            f"/api/v1/admin/domains/{domain['domain_id']}/status", headers=auth_headers, json={"status": "active"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "rejected"

    def test_list_with_filter(self, client, auth_headers, user_headers, available_domain, mock_provider):
        self._pending_domain(client, auth_headers, user_headers, available_domain)
        response = client.get("/api/v1/admin/domains?status=pending", headers=auth_headers)
        data = response.json()
        assert response.status_code == 200
        assert data["total"] == 1
        assert data["items"][0]["subdomain"] == "review"

    def test_value_override_on_pending_record(self, client, auth_headers, user_headers, available_domain):
        domain = self._pending_domain(client, auth_headers, user_headers, available_domain)
        response = client.patch(
            f"/api/v1/admin/domains/{domain['domain_id']}/value", headers=auth_headers, json={"value": "9.9.9.9"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_state"

    def test_admin_delete(self, client, auth_headers, user_headers, available_domain, mock_provider):
        domain = self._pending_domain(client, auth_headers, user_headers, available_domain)
        response = client.delete(f"/api/v1/admin/domains/{domain['domain_id']}", headers=auth_headers)
        assert response.status_code == 204
        assert client.get("/api/v1/admin/domains", headers=auth_headers).json()["total"] == 0


class TestUserAdminEndpoints:

    def test_list_users_with_counts(self, client, auth_headers, regular_user):
        response = client.get("/api/v1/admin/users", headers=auth_headers)
        assert response.status_code == 200
        counts = {u["email"]: u["domain_count"] for u in response.json()}
        assert counts == {"admin@test.com": 0, "user@test.com": 0}

    def test_update_quota(self, client, auth_headers, regular_user):
        response = client.patch(
            f"/api/v1/admin/users/{regular_user.user_id}", headers=auth_headers, json={"quota": 20}
        )
        assert response.status_code == 200
        assert response.json()["quota"] == 20

    def test_quota_bounds(self, client, auth_headers, regular_user):
        response = client.patch(
            f"/api/v1/admin/users/{regular_user.user_id}", headers=auth_headers, json={"quota": 5000}
        )
        assert response.status_code == 422

    def test_cannot_demote_self(self, client, auth_headers, admin_user):
        response = client.patch(
            f"/api/v1/admin/users/{admin_user.user_id}", headers=auth_headers, json={"role": "user"}
        )
        assert response.status_code == 400

    def test_deactivated_user_locked_out(self, client, auth_headers, user_headers, regular_user):
        client.patch(f"/api/v1/admin/users/{regular_user.user_id}", headers=auth_headers, json={"is_active": False})
        assert client.get("/api/v1/auth/me", headers=user_headers).status_code == 403


class TestSettingsAndStats:

    def test_list_settings(self, client, auth_headers):
        response = client.get("/api/v1/admin/settings", headers=auth_headers)
        assert response.status_code == 200
        assert {s["key"] for s in response.json()} == {
            "default_domain_status", "default_user_quota", "allow_registration", "require_invite_code"
        }

    def test_invalid_setting_value(self, client, auth_headers):
        response = client.put(
            "/api/v1/admin/settings/default_domain_status", headers=auth_headers, json={"value": "rejected"}
        )
        assert response.status_code == 400

    def test_unknown_setting(self, client, auth_headers):
        response = client.put("/api/v1/admin/settings/nope", headers=auth_headers, json={"value": "x"})
        assert response.status_code == 404

    def test_invite_code_crud(self, client, auth_headers):
        created = client.post("/api/v1/admin/invite-codes", headers=auth_headers, json={"max_uses": 3})
        assert created.status_code == 201
        invite = created.json()
        assert invite["is_usable"] is True

        client.patch(f"/api/v1/admin/invite-codes/{invite['invite_code_id']}", headers=auth_headers, json={"is_active": False})
        listed = client.get("/api/v1/admin/invite-codes", headers=auth_headers).json()
        assert listed[0]["is_usable"] is False

        deleted = client.delete(f"/api/v1/admin/invite-codes/{invite['invite_code_id']}", headers=auth_headers)
        assert deleted.status_code == 204

    def test_stats(self, client, auth_headers, user_headers, available_domain, mock_provider):
        client.post(
            "/api/v1/domains",
            headers=user_headers,
            json={"available_domain_id": available_domain.available_domain_id, "subdomain": "a", "value": "1.2.3.4"}
        )
        data = client.get("/api/v1/admin/stats", headers=auth_headers).json()
        assert data["users"]["total"] == 2
        assert data["domains"] == {"total": 1, "active": 1, "pending": 0, "rejected": 0, "recent": 1}
        assert data["dns_accounts"]["active"] == 1


class TestProviderEndpoints:
    """Tests for /admin/providers and the user-facing catalogue."""

    def test_admin_lists_all_providers(self, client, auth_headers, dns_account):
        response = client.get("/api/v1/admin/providers", headers=auth_headers)
        assert response.status_code == 200
        providers = {p["type"]: p for p in response.json()}
        assert set(providers) == {"cloudflare", "aliyun"}
        assert providers["cloudflare"]["account_count"] == 1

    def test_disabled_provider_hidden_and_refused(self, client, auth_headers, user_headers, mock_provider):
        response = client.patch("/api/v1/admin/providers/aliyun", headers=auth_headers, json={"is_active": False})
        assert response.status_code == 200
        assert response.json()["is_active"] is False

        visible = client.get("/api/v1/providers", headers=user_headers).json()
        assert [p["type"] for p in visible] == ["cloudflare"]

        created = client.post(
            "/api/v1/admin/dns-accounts",
            headers=auth_headers,
            json={"name": "Ali", "provider_type": "aliyun", "credentials": {"accessKeyId": "a", "accessKeySecret": "b"}}
        )
        assert created.status_code == 400
        assert created.json()["code"] == "unsupported_provider"

    def test_rename_provider(self, client, auth_headers):
        response = client.patch(
            "/api/v1/admin/providers/cloudflare", headers=auth_headers, json={"display_name": "Cloudflare DNS"}
        )
        assert response.status_code == 200
        assert response.json()["display_name"] == "Cloudflare DNS"
        assert response.json()["is_active"] is True

    def test_unknown_provider(self, client, auth_headers):
        response = client.patch("/api/v1/admin/providers/route53", headers=auth_headers, json={"is_active": False})
        assert response.status_code == 400

    def test_requires_admin(self, client, user_headers):
        response = client.patch("/api/v1/admin/providers/cloudflare", headers=user_headers, json={"is_active": False})
        assert response.status_code == 403
