"""Result shapes for the GitSet service endpoints."""

from dataclasses import dataclass, field
from typing import Any


class APIError(Exception):
    """Raised when a request fails or a response has an unexpected shape."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


def _require(data: Any, key: str, endpoint: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise APIError(f"Unexpected response from {endpoint}: missing '{key}'")
    return data[key]


@dataclass
class GenerationResult:
    commit_message: str

    @property
    def title(self) -> str:
        return self.commit_message.split('\n', 1)[0]

    @property
    def body(self) -> str:
        parts = self.commit_message.split('\n', 1)
        return parts[1] if len(parts) > 1 else ""

    @classmethod
    def from_dict(cls, data: Any) -> 'GenerationResult':
        message = _require(data, 'commit_message', '/generate-commit-message')
        if not isinstance(message, str) or not message.strip():
            raise APIError("Unexpected response from /generate-commit-message: empty commit message")
        return cls(commit_message=message.strip())


@dataclass
class LicenseStatus:
    product_name: str
    status: str = ""
    renews_at: str | None = None
    raw: dict = field(default_factory=dict)

    @property
    def is_pro(self) -> bool:
        return 'pro' in self.product_name.lower()

    @classmethod
    def from_dict(cls, data: Any) -> 'LicenseStatus':
        details = _require(data, 'data', '/validate-license')
        product_name = _require(details, 'product_name', '/validate-license')
        return cls(
            product_name=str(product_name),
            status=str(details.get('status') or ''),
            renews_at=details.get('renews_at'),
            raw=details,
        )


@dataclass
class UsageInfo:
    current_usage: int
    limit: int
    next_reset_date: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> 'UsageInfo':
        try:
            return cls(
                current_usage=int(_require(data, 'current_usage', '/usage-info')),
                limit=int(_require(data, 'limit', '/usage-info')),
                next_reset_date=data.get('next_reset_date'),
            )
        except (TypeError, ValueError):
            raise APIError("Unexpected response from /usage-info: usage counts are not numbers")


@dataclass
class QuotaExceeded:
    """Body of a 429 response once the monthly allowance is used up."""
    message: str = ""
    next_reset_date: str | None = None
    days_until_reset: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> 'QuotaExceeded':
        return cls(
            message=str(data.get('message') or ''),
            next_reset_date=data.get('next_reset_date'),
            days_until_reset=data.get('days_until_reset'),
        )


class QuotaExceededError(SystemExit):
    """Ends the process with exit code 1 once the monthly allowance is used up.

    Not an APIError: handlers for request failures let it pass. The notice
    is printed by the command entry point once the command has unwound.
    """

    def __init__(self, quota: QuotaExceeded):
        super().__init__(1)
        self.quota = quota
