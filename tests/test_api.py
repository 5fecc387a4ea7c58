"""
Tests for the GitSet service client.

urllib.request.urlopen is replaced with a recorder, so no network is used. Run with:
    pytest tests/test_api.py -v
"""

import io
import json
import urllib.error
import urllib.request

import pytest

from gitset.api import (
    APIError,
    GitSetClient,
    GenerationResult,
    LicenseStatus,
    QuotaExceeded,
    QuotaExceededError,
    UsageInfo,
    render_quota_exceeded,
)
from gitset.config.credentials import CredentialStore
from gitset.git import ChangeSetRequest, FileChange


class FakeResponse:
    def __init__(self, body):
        self._body = body if isinstance(body, bytes) else json.dumps(body).encode('utf-8')

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False


def http_error(code, body):
    raw = body if isinstance(body, bytes) else json.dumps(body).encode('utf-8')
    return urllib.error.HTTPError("https://api.test/x", code, "error", {}, io.BytesIO(raw))


@pytest.fixture
def store(tmp_path):
    return CredentialStore(tmp_path / "gitset" / "credentials.json")


@pytest.fixture
def client(store):
    return GitSetClient(store, base_url="https://api.test/")


@pytest.fixture
def server(monkeypatch):
    """Queue responses (dicts, bytes or exceptions) and record requests."""
    class Server:
        def __init__(self):
            self.responses = []
            self.requests = []

        def urlopen(self, req, timeout=None):
            self.requests.append(req)
            response = self.responses.pop(0)
            if isinstance(response, BaseException):
                raise response
            return FakeResponse(response)

    srv = Server()
    monkeypatch.setattr(urllib.request, "urlopen", srv.urlopen)
    return srv


def _headers(req):
    return {k.lower(): v for k, v in req.header_items()}


# ---------------------------------------------------------------------------
# Request building
# ---------------------------------------------------------------------------

class TestRequest:

    def test_posts_json_to_endpoint(self, client, server):
        server.responses.append({"ok": True})
        assert client.request("/usage-info", {"licenseKey": "K"}) == {"ok": True}

        req = server.requests[0]
        assert req.full_url == "https://api.test/usage-info"
        assert req.get_method() == "POST"
        assert json.loads(req.data) == {"licenseKey": "K"}
        assert _headers(req)["content-type"] == "application/json"

    def test_installation_id_header_without_license(self, client, server, store):
        server.responses.append({})
        client.request("/x", {})

        headers = _headers(server.requests[0])
        assert headers["x-installation-id"] == store.load().installation_id
        assert "x-license-key" not in headers

    def test_license_header_when_configured(self, client, server, store):
        record = store.load()
        record.license_key = "LIC-123"
        store.save(record)
        server.responses.append({})

        client.request("/x", {})
        assert _headers(server.requests[0])["x-license-key"] == "LIC-123"

    def test_installation_id_is_created_and_persisted(self, client, server, store):
        assert not store.path.exists()
        server.responses.append({})
        client.request("/x", {})
        assert store.path.exists()
        sent = _headers(server.requests[0])["x-installation-id"]
        assert json.loads(store.path.read_text())["installationId"] == sent


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------

class TestErrors:

    def test_message_field_surfaced(self, client, server):
        server.responses.append(http_error(400, {"message": "Invalid license key"}))
        with pytest.raises(APIError, match="Invalid license key") as exc:
            client.request("/validate-license", {"licenseKey": "bad"})
        assert exc.value.status == 400

    def test_plain_text_body(self, client, server):
        server.responses.append(http_error(502, b"Bad Gateway"))
        with pytest.raises(APIError, match="Bad Gateway"):
            client.request("/x", {})

    def test_generic_message_when_body_empty(self, client, server):
        server.responses.append(http_error(500, b""))
        with pytest.raises(APIError, match="Failed to make request"):
            client.request("/x", {})

    def test_unreachable_host(self, client, server):
        server.responses.append(urllib.error.URLError("Name or service not known"))
        with pytest.raises(APIError, match="Could not reach"):
            client.request("/x", {})

    def test_invalid_json_success_body(self, client, server):
        server.responses.append(b"<html>oops</html>")
        with pytest.raises(APIError, match="Invalid JSON"):
            client.request("/x", {})

    def test_undecodable_success_body(self, client, server):
        server.responses.append(b'{"commit_message": "\xff\xfe"}')
        with pytest.raises(APIError, match="Invalid JSON response from /generate-commit-message"):
            client.request("/generate-commit-message", {})

    def test_429_without_quota_status_is_plain_error(self, client, server):
        server.responses.append(http_error(429, {"message": "Slow down"}))
        with pytest.raises(APIError, match="Slow down"):
            client.request("/x", {})


class TestQuotaExceeded:

    def test_raises_quota_error_without_printing(self, client, server, capsys):
        server.responses.append(http_error(429, {
            "status": "quota_exceeded",
            "message": "You have used all 10 requests",
            "next_reset_date": "2025-01-01",
            "days_until_reset": 5,
        }))

        with pytest.raises(QuotaExceededError) as exc:
            client.request("/generate-commit-message", {})

        assert exc.value.code == 1
        assert isinstance(exc.value, SystemExit)
        assert not isinstance(exc.value, APIError)
        assert exc.value.quota == QuotaExceeded(
            message="You have used all 10 requests",
            next_reset_date="2025-01-01",
            days_until_reset=5,
        )
        out = capsys.readouterr()
        assert out.out == "" and out.err == ""
        assert len(server.requests) == 1

    def test_render_prints_reset_info(self, capsys):
        render_quota_exceeded(QuotaExceeded(
            message="You have used all 10 requests",
            next_reset_date="2025-01-01T00:00:00Z",
            days_until_reset=5,
        ))

        out = capsys.readouterr()
        assert "Monthly request limit reached" in out.err
        assert "You have used all 10 requests" in out.out
        assert "Next reset date: 2025-01-01" in out.out
        assert "Remaining days: 5" in out.out
        assert "gitset activate <license-key>" in out.out


# ---------------------------------------------------------------------------
# Typed endpoints
# ---------------------------------------------------------------------------

class TestEndpoints:

    def test_generate_commit_message(self, client, server):
        server.responses.append({"commit_message": "feat(cli): add status command\n\n- show plan"})
        change_set = ChangeSetRequest(
            repo_name="acme/widgets",
            file_changes=[FileChange(name="a.py", path="src/a.py", change_type="added", content_type="text", after="x")],
        )

        result = client.generate_commit_message(change_set)

        assert isinstance(result, GenerationResult)
        assert result.title == "feat(cli): add status command"
        assert result.body == "\n- show plan"
        body = json.loads(server.requests[0].data)
        assert body["repo_name"] == "acme/widgets"
        assert body["file_changes"][0]["changes"] == {"before": "", "after": "x"}

    def test_generate_rejects_missing_message(self, client, server):
        server.responses.append({"message": "ok"})
        with pytest.raises(APIError, match="commit_message"):
            client.generate_commit_message(ChangeSetRequest(repo_name=""))

    def test_validate_license(self, client, server):
        server.responses.append({"data": {"product_name": "GitSet Pro", "status": "active", "renews_at": "2026-03-01T00:00:00Z"}})
        status = client.validate_license("KEY")

        assert isinstance(status, LicenseStatus)
        assert status.is_pro
        assert status.status == "active"
        assert status.raw["renews_at"] == "2026-03-01T00:00:00Z"
        assert json.loads(server.requests[0].data) == {"licenseKey": "KEY"}

    def test_validate_license_shape_mismatch(self, client, server):
        server.responses.append({"valid": True})
        with pytest.raises(APIError, match="data"):
            client.validate_license("KEY")

    def test_usage_info(self, client, server):
        server.responses.append({"current_usage": 3, "limit": 10, "next_reset_date": "2025-02-01"})
        usage = client.usage_info("KEY")
        assert usage == UsageInfo(current_usage=3, limit=10, next_reset_date="2025-02-01")

    def test_usage_info_non_numeric(self, client, server):
        server.responses.append({"current_usage": "many", "limit": 10})
        with pytest.raises(APIError):
            client.usage_info("KEY")
