"""GitSet Service Client"""

import json
import socket
import urllib.error
import urllib.request

from gitset import API_URL, PRICING_URL
from gitset.api.base import APIError, GenerationResult, LicenseStatus, UsageInfo, QuotaExceeded, QuotaExceededError
from gitset.config.credentials import CredentialStore
from gitset.git.payload import ChangeSetRequest
from gitset.output import log_step, format_date


def render_quota_exceeded(quota: QuotaExceeded) -> None:
    log_step('Quota', 'Monthly request limit reached:', is_error=True)
    if quota.message:
        log_step('Info', quota.message)
    log_step('Info', f"Next reset date: {format_date(quota.next_reset_date)}")
    log_step('Info', f"Remaining days: {quota.days_until_reset if quota.days_until_reset is not None else 'unknown'}")
    log_step('Upgrade', 'To remove limits, activate a pro license:')
    log_step('Command', '  gitset activate <license-key>')
    log_step('Purchase', f"Visit {PRICING_URL} to get a license")


class GitSetClient:
    """POSTs JSON to the GitSet service with license and installation headers."""

    DEFAULT_TIMEOUT = 60

    def __init__(self, credentials: CredentialStore, base_url: str | None = None, timeout: int | None = None):
        self.credentials = credentials
        self.base_url = (base_url or API_URL).rstrip('/')
        self.timeout = timeout or self.DEFAULT_TIMEOUT

    def _headers(self) -> dict:
        record = self.credentials.ensure_installation_id(self.credentials.load())
        headers = {
            'Content-Type': 'application/json',
            'X-Installation-Id': record.installation_id,
        }
        if record.license_key:
            headers['X-License-Key'] = record.license_key
        return headers

    def _error_body(self, e: urllib.error.HTTPError):
        """Decode an error body as JSON, falling back to plain text."""
        try:
            raw = e.read().decode('utf-8', errors='replace')
        except (OSError, AttributeError):
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw.strip()

    def _handle_http_error(self, e: urllib.error.HTTPError) -> APIError:
        body = self._error_body(e)

        if e.code == 429 and isinstance(body, dict) and body.get('status') == 'quota_exceeded':
            raise QuotaExceededError(QuotaExceeded.from_dict(body))

        if isinstance(body, dict) and body.get('message'):
            message = str(body['message'])
        elif isinstance(body, str) and body:
            message = body
        else:
            message = 'Failed to make request'
        return APIError(message, status=e.code)

    def request(self, endpoint: str, body: dict) -> dict:
        """Send one POST and return the decoded JSON body.

        A 429 quota response raises QuotaExceededError, which exits with
        code 1 unless handled; every other failure is raised as APIError.
        """
        url = f"{self.base_url}{endpoint}"
        data = json.dumps(body).encode('utf-8')
        req = urllib.request.Request(url, data=data, headers=self._headers(), method='POST')

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                raw = response.read()
        except urllib.error.HTTPError as e:
            raise self._handle_http_error(e)
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise APIError(f"Request to {endpoint} timed out after {self.timeout}s")
            raise APIError(f"Could not reach {self.base_url}: {e.reason}")
        except socket.timeout:
            raise APIError(f"Request to {endpoint} timed out after {self.timeout}s")
        except OSError as e:
            raise APIError(f"Connection to {self.base_url} lost: {e}")

        try:
            return json.loads(raw.decode('utf-8'))
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise APIError(f"Invalid JSON response from {endpoint}")

    def generate_commit_message(self, change_set: ChangeSetRequest) -> GenerationResult:
        return GenerationResult.from_dict(self.request('/generate-commit-message', change_set.to_dict()))

    def validate_license(self, license_key: str) -> LicenseStatus:
        return LicenseStatus.from_dict(self.request('/validate-license', {'licenseKey': license_key}))

    def usage_info(self, license_key: str) -> UsageInfo:
        return UsageInfo.from_dict(self.request('/usage-info', {'licenseKey': license_key}))
