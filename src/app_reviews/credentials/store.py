"""Credential stores.

The install/OAuth flow lives outside this service; it leaves offline
sessions somewhere we can read. A store answers one question: which
offline access token may act for this shop right now?

- FileCredentialStore: YAML/JSON sessions file, reloaded whenever it changes
- StaticCredentialStore: single dev-store shop + admin token from settings
- ChainCredentialStore: first store with an answer wins
"""

import json
import threading
from datetime import timezone
from pathlib import Path
from typing import Protocol

import yaml
from pydantic import ValidationError

from ..logging import logger
from ..schemas.credential import Credential, SessionsFile


class CredentialStoreError(Exception):
    """The store exists but could not be read."""


class CredentialStore(Protocol):
    def find_offline(self, shop: str) -> Credential | None: ...


def _recency(credential: Credential) -> float:
    if credential.updated_at is None:
        return float("-inf")
    ts = credential.updated_at
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.timestamp()


def pick_offline(credentials: list[Credential], shop: str) -> Credential | None:
    """Most recently updated offline session for the shop; later entries win ties."""
    best: Credential | None = None
    for credential in credentials:
        if credential.shop != shop or not credential.is_offline or not credential.access_token:
            continue
        if best is None or _recency(credential) >= _recency(best):
            best = credential
    return best


class FileCredentialStore:
    """Sessions file of the form ``{"sessions": [{shop, access_token, is_online, updated_at}]}``.

    The parsed file is kept in memory together with the (mtime, size) it
    was read at. Every lookup stats the file first, so a rewrite that drops
    or replaces a session (uninstall, token rotation) is seen by the very
    next lookup. A missing file means no shop is authorized.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._signature: tuple[int, int] | None = None
        self._sessions: list[Credential] = []

    def _load(self) -> list[Credential]:
        raw = self.path.read_text(encoding="utf-8")
        if self.path.suffix == ".json":
            data = json.loads(raw) if raw.strip() else {}
        else:
            data = yaml.safe_load(raw) or {}
        if isinstance(data, list):
            data = {"sessions": data}
        return SessionsFile.model_validate(data).sessions

    def sessions(self) -> list[Credential]:
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            with self._lock:
                self._signature = None
                self._sessions = []
            return []

        signature = (stat.st_mtime_ns, stat.st_size)
        with self._lock:
            if signature != self._signature:
                try:
                    self._sessions = self._load()
                except (OSError, ValueError, yaml.YAMLError, ValidationError) as e:
                    self._signature = None
                    self._sessions = []
                    raise CredentialStoreError(f"Failed to read {self.path}: {e}") from e
                self._signature = signature
                logger.info(f"Loaded {len(self._sessions)} session(s) from {self.path}")
            return list(self._sessions)

    def find_offline(self, shop: str) -> Credential | None:
        return pick_offline(self.sessions(), shop)


class StaticCredentialStore:
    """Development-store shortcut: one shop, one admin API token."""

    def __init__(self, shop: str, access_token: str):
        self.shop = shop
        self.access_token = access_token

    def find_offline(self, shop: str) -> Credential | None:
        if not self.shop or not self.access_token or shop != self.shop:
            return None
        return Credential(shop=self.shop, access_token=self.access_token, is_online=False)


class ChainCredentialStore:
    def __init__(self, stores: list[CredentialStore]):
        self.stores = stores

    def find_offline(self, shop: str) -> Credential | None:
        for store in self.stores:
            credential = store.find_offline(shop)
            if credential is not None:
                return credential
        return None


def build_credential_store(settings) -> ChainCredentialStore:
    stores: list[CredentialStore] = []
    if settings.dev_shop_domain and settings.dev_admin_token:
        stores.append(StaticCredentialStore(settings.dev_shop_domain, settings.dev_admin_token))
        logger.info(f"Dev store credential enabled for {settings.dev_shop_domain}")
    if settings.credential_store_path:
        stores.append(FileCredentialStore(settings.credential_store_path))
        logger.info(f"Session file credential store: {settings.credential_store_path}")
    return ChainCredentialStore(stores)