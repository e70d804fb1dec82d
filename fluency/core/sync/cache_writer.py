# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Versioned detail cache.

Keys have the form ``{prefix}:{root_id}:{status}:{version}``, for example
``listening_question:7f3c...:complete:3``. Clients look up a key of the
version they hold to decide whether to refetch, so status and version stay
in the key.

Writing a detail stores the new key and then deletes every other key of
the same root. A reader racing the cleanup may see two keys; get_cached
resolves that by taking the highest version.
"""

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from pydantic import ValidationError

from fluency.core.sync.detail import CompletionStatus, ContentDetail
from fluency.core.sync.family import ContentFamily
from fluency.core.sync.interfaces import CacheStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheKey:
    """Parsed cache key."""

    prefix: str
    root_id: str
    status: CompletionStatus
    version: int

    def __str__(self) -> str:
        return f"{self.prefix}:{self.root_id}:{self.status.value}:{self.version}"

    @classmethod
    def parse(cls, key: str) -> "CacheKey | None":
        parts = key.split(":")
        if len(parts) != 4:
            return None
        prefix, root_id, status, version = parts
        try:
            return cls(prefix, root_id, CompletionStatus(status), int(version))
        except ValueError:
            return None


@dataclass(frozen=True)
class CachedDetail:
    """A detail read back from the cache together with its key metadata."""

    detail: ContentDetail
    status: CompletionStatus
    version: int


class DetailCache:
    """Cache writer and reader for one content family.

    When disabled, writes are skipped and reads always miss.

    Attributes:
        family: The content family.
        ttl_seconds: Lifetime of each entry.
        enabled: Whether the cache is used at all.
    """

    def __init__(
        self,
        store: CacheStore | None,
        family: ContentFamily,
        ttl_seconds: int = 24 * 60 * 60,
        enabled: bool = True,
    ) -> None:
        self._store = store
        self.family = family
        self.ttl_seconds = ttl_seconds
        self.enabled = enabled and store is not None

    def key_for(self, root_id: UUID | str, status: CompletionStatus, version: int) -> str:
        return str(CacheKey(self.family.key_prefix, str(root_id), status, version))

    def _root_pattern(self, root_id: UUID | str) -> str:
        return f"{self.family.key_prefix}:{root_id}:*"

    async def set_cached(self, detail: ContentDetail, status: CompletionStatus) -> str | None:
        """Store a detail under its versioned key and drop the root's other keys.

        Returns:
            The key written, or None when the cache is disabled.

        Raises:
            Exception: Whatever the cache store raises.
        """
        if not self.enabled:
            return None

        key = self.key_for(detail.id, status, detail.version)
        existing = await self._store.keys(self._root_pattern(detail.id))

        await self._store.set(
            key,
            detail.model_dump_json(exclude_none=True),
            expire_seconds=self.ttl_seconds,
        )

        stale = [k for k in existing if k != key]
        for stale_key in stale:
            await self._store.delete(stale_key)

        logger.debug(
            "Cached %s detail %s (removed %d stale keys)",
            self.family.name,
            key,
            len(stale),
        )
        return key

    async def remove_entries(self, root_id: UUID | str) -> int:
        """Delete every cached key of a root.

        Returns:
            Number of keys removed.
        """
        if not self.enabled:
            return 0
        return await self._store.delete_pattern(self._root_pattern(root_id))

    async def live_keys(self, root_id: UUID | str) -> list[CacheKey]:
        """Parsed keys currently stored for a root, highest version first."""
        if not self.enabled:
            return []
        keys = [CacheKey.parse(k) for k in await self._store.keys(self._root_pattern(root_id))]
        return sorted(
            (k for k in keys if k is not None),
            key=lambda k: (k.version, k.status == CompletionStatus.COMPLETE),
            reverse=True,
        )

    async def get_cached(self, root_id: UUID | str) -> CachedDetail | None:
        """Read the current detail of a root.

        Returns:
            The cached detail, or None on a miss or an undecodable entry.
        """
        for key in await self.live_keys(root_id):
            raw = await self._store.get(str(key))
            if raw is None:
                continue
            detail = self._decode(raw, key)
            if detail is not None:
                return CachedDetail(detail=detail, status=key.status, version=key.version)
        return None

    async def has_version(self, root_id: UUID | str, version: int) -> bool:
        """Whether a key for exactly this version of the root exists, in either status."""
        return any(k.version == version for k in await self.live_keys(root_id))

    def _decode(self, raw: Any, key: CacheKey) -> ContentDetail | None:
        model = self.family.detail_model
        try:
            if isinstance(raw, (str, bytes)):
                return model.model_validate_json(raw)
            return model.model_validate(raw)
        except ValidationError:
            logger.warning(
                "Discarding undecodable cache entry %s",
                key,
                extra={"family": self.family.name, "root_id": key.root_id},
            )
            return None
