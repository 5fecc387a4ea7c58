"""Credential Store - License key and installation id on disk."""

import json
import os
import sys
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

CREDENTIALS_FILENAME = "credentials.json"
LOCAL_DIRNAME = ".gitset"

# Field name on disk -> attribute name
_FIELD_NAMES = {
    'licenseKey': 'license_key',
    'lastValidation': 'last_validation',
    'installationId': 'installation_id',
    'subscriptionData': 'subscription_data',
}


class CredentialError(Exception):
    """Raised when the credentials file exists but can't be used."""
    pass


def new_installation_id() -> str:
    return str(uuid.uuid4())


def system_credentials_dir(home: Path, platform: str, environ: Mapping[str, str]) -> Path:
    if platform == 'darwin':
        return home / 'Library' / 'Application Support' / 'GitSet'
    if platform == 'win32':
        return Path(environ.get('APPDATA', '')) / 'GitSet'
    return home / '.local' / 'share' / 'gitset'


def resolve_credentials_path(cwd: Path, home: Path, platform: str, environ: Mapping[str, str]) -> Path:
    """Pick the credentials file for this environment.

    Precedence: project-local .gitset/credentials.json, then the user's
    ~/.config/gitset/credentials.json, then the platform data directory.
    Only the first two need to exist; the last is where a new file goes.
    """
    local_path = cwd / LOCAL_DIRNAME / CREDENTIALS_FILENAME
    if local_path.exists():
        return local_path

    global_path = home / '.config' / 'gitset' / CREDENTIALS_FILENAME
    if global_path.exists():
        return global_path

    return system_credentials_dir(home, platform, environ) / CREDENTIALS_FILENAME


@dataclass
class CredentialRecord:
    """Everything persisted between runs."""
    installation_id: Optional[str] = None
    license_key: Optional[str] = None
    last_validation: Optional[str] = None
    subscription_data: Optional[dict] = None
    extra: dict = field(default_factory=dict)

    @property
    def has_license(self) -> bool:
        return bool(self.license_key)

    def clear_license(self) -> None:
        self.license_key = None
        self.last_validation = None
        self.subscription_data = None

    def to_dict(self) -> dict:
        data = dict(self.extra)
        for key, attr in _FIELD_NAMES.items():
            data[key] = getattr(self, attr)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'CredentialRecord':
        known = {attr: data.get(key) for key, attr in _FIELD_NAMES.items()}
        extra = {k: v for k, v in data.items() if k not in _FIELD_NAMES}
        return cls(extra=extra, **known)


class CredentialStore:
    """Loads and saves the CredentialRecord at a resolved path."""

    def __init__(self, path: Path | None = None):
        self.path = path or resolve_credentials_path(
            cwd=Path.cwd(),
            home=Path.home(),
            platform=sys.platform,
            environ=os.environ,
        )

    def load(self) -> CredentialRecord:
        """Read the record, creating or backfilling the installation id.

        A missing file is a first run, not an error. Anything else that
        stops the file from being read or parsed is raised.
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            record = CredentialRecord(installation_id=new_installation_id())
            self.save(record)
            return record
        except json.JSONDecodeError as e:
            raise CredentialError(f"Credentials file {self.path} is not valid JSON: {e}")
        except OSError as e:
            raise CredentialError(f"Could not read credentials file {self.path}: {e}")

        if not isinstance(data, dict):
            raise CredentialError(f"Credentials file {self.path} must contain a JSON object")

        return self.ensure_installation_id(CredentialRecord.from_dict(data))

    def save(self, record: CredentialRecord) -> Path:
        """Write the whole record, owner read/write only."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(record.to_dict(), f, indent=2)
            # O_CREAT mode only applies to new files
            os.chmod(self.path, 0o600)
        except OSError as e:
            raise CredentialError(f"Could not write credentials file {self.path}: {e}")
        return self.path

    def ensure_installation_id(self, record: CredentialRecord) -> CredentialRecord:
        if not record.installation_id:
            record.installation_id = new_installation_id()
            self.save(record)
        return record


__all__ = [
    "CredentialError",
    "CredentialRecord",
    "CredentialStore",
    "resolve_credentials_path",
    "system_credentials_dir",
    "new_installation_id",
    "CREDENTIALS_FILENAME",
]
