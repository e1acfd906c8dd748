"""Credential store adapter for the Wrike access token."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Optional

from wrike_bridge.constants import SECRET_KEY
from wrike_bridge.exceptions import StorageFailure
from wrike_bridge.host import SecretStorage

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Holds the single Wrike access token in host secret storage.

    Any fault raised by the storage is re-raised as StorageFailure.
    """

    def __init__(self, secrets: SecretStorage, key: str = SECRET_KEY) -> None:
        self._secrets = secrets
        self._key = key

    async def get(self) -> Optional[str]:
        try:
            return await self._secrets.get(self._key)
        except Exception as e:
            raise StorageFailure(f"Could not read Wrike token: {e}") from e

    async def set(self, token: str) -> None:
        try:
            await self._secrets.store(self._key, token)
        except Exception as e:
            raise StorageFailure(f"Could not save Wrike token: {e}") from e
        logger.info("Wrike token stored")

    async def delete(self) -> None:
        """Remove the token. Succeeds if no token is stored."""
        try:
            await self._secrets.delete(self._key)
        except Exception as e:
            raise StorageFailure(f"Could not delete Wrike token: {e}") from e
        logger.info("Wrike token deleted")


class FileSecretStorage:
    """
    Secret storage backed by a JSON file readable only by its owner.

    File access runs in a worker thread so callers stay non-blocking.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not contain a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def _store(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def _delete(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    async def get(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def store(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._store, key, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._delete, key)
