"""GitSet Service API Package"""

from gitset.api.base import APIError, GenerationResult, LicenseStatus, UsageInfo, QuotaExceeded, QuotaExceededError
from gitset.api.client import GitSetClient, render_quota_exceeded

__all__ = [
    "APIError",
    "GenerationResult",
    "LicenseStatus",
    "UsageInfo",
    "QuotaExceeded",
    "QuotaExceededError",
    "GitSetClient",
    "render_quota_exceeded",
]
