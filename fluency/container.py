# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Service container.

Wires every content family to the database, the detail cache and the
search index, and owns their lifecycle.

Startup order:
- Database engine and sessionmaker
- Redis (optional: the cache is disabled when it cannot be reached)
- Qdrant

Example:
    async with ContentContainer.lifespan(get_settings()) as container:
        listening = container.roots("listening")
        detail = await listening.create({"type": "MATCHING"})
        await container.children("listening").create(
            "matching", detail.id, {"question": "...", "answer": "..."}
        )
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Callable

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from fluency.core.config import Settings
from fluency.core.errors import ContentValidationError
from fluency.core.sync import (
    CacheStore,
    CompletionClassifier,
    ContentUpdator,
    DetailBuilder,
    DetailCache,
    SearchIndex,
    SearchUpserter,
)
from fluency.domains import course, grammar, listening, reading, speaking, writing
from fluency.domains.content import (
    ChildContentService,
    FamilyDefinition,
    ResyncReport,
    RootContentService,
)
from fluency.infrastructure.cache import RedisClient, RedisError
from fluency.infrastructure.database import (
    check_database_connection,
    create_engine,
    create_sessionmaker,
)
from fluency.infrastructure.search import QdrantSearchClient
from fluency.utils.logging import setup_logging

logger = logging.getLogger(__name__)

FAMILY_DEFINITIONS: dict[str, Callable[[], FamilyDefinition]] = {
    "listening": listening.build_definition,
    "reading": reading.build_definition,
    "grammar": grammar.build_definition,
    "speaking": speaking.build_definition,
    "writing": writing.build_definition,
    "course": course.build_definition,
}


@dataclass
class FamilyServices:
    """Services of one content family."""

    definition: FamilyDefinition
    updator: ContentUpdator
    roots: RootContentService
    children: ChildContentService


class ContentContainer:
    """Holds the wired services of every content family.

    Cache and search backends can be injected (tests use in-memory fakes);
    otherwise start() connects Redis and Qdrant from the settings.

    Attributes:
        settings: Application settings.
    """

    def __init__(
        self,
        settings: Settings,
        sessionmaker: async_sessionmaker[AsyncSession] | None = None,
        cache_store: CacheStore | None = None,
        search_index: SearchIndex | None = None,
    ) -> None:
        self.settings = settings
        self._engine: AsyncEngine | None = None
        self._sessionmaker = sessionmaker
        self._cache_store = cache_store
        self._search_index = search_index
        self._redis: RedisClient | None = None
        self._qdrant: QdrantSearchClient | None = None
        self._families: dict[str, FamilyServices] = {}

    @property
    def started(self) -> bool:
        return bool(self._families)

    @property
    def cache_enabled(self) -> bool:
        return self.settings.cache.enabled and self._cache_store is not None

    async def start(self) -> None:
        """Connect backends and wire every family.

        Raises:
            QdrantError: If the search index cannot be reached.
        """
        if self.started:
            return

        if self._sessionmaker is None:
            self._engine = create_engine(
                self.settings.db.url,
                pool_size=self.settings.db.pool_size,
                max_overflow=self.settings.db.max_overflow,
                echo=self.settings.debug,
            )
            self._sessionmaker = create_sessionmaker(self._engine)
            logger.info("Database engine created")

        if self._cache_store is None and self.settings.cache.enabled:
            redis = RedisClient(self.settings)
            try:
                await redis.connect()
            except RedisError as e:
                logger.warning("Redis unavailable, detail cache disabled: %s", e)
            else:
                self._redis = redis
                self._cache_store = redis
                logger.info("Redis connection initialized")

        if self._search_index is None:
            qdrant = QdrantSearchClient(self.settings)
            await qdrant.connect()
            self._qdrant = qdrant
            self._search_index = qdrant
            logger.info("Qdrant connection initialized")

        for name, build in FAMILY_DEFINITIONS.items():
            self._families[name] = self._wire(build())

        logger.info(
            "Content container started",
            extra={
                "families": list(self._families),
                "cache_enabled": self.cache_enabled,
                "serialize_per_root": self.settings.sync.serialize_per_root,
            },
        )

    def _wire(self, definition: FamilyDefinition) -> FamilyServices:
        family = definition.family
        updator = ContentUpdator(
            builder=DetailBuilder(family, self._sessionmaker),
            classifier=CompletionClassifier(family.registry),
            cache=DetailCache(
                self._cache_store,
                family,
                ttl_seconds=self.settings.cache.ttl_seconds,
                enabled=self.settings.cache.enabled,
            ),
            search=SearchUpserter(self._search_index, family),
            serialize_per_root=self.settings.sync.serialize_per_root,
        )
        roots = RootContentService(
            definition,
            self._sessionmaker,
            updator,
            search_page_size=self.settings.sync.search_page_size,
        )
        return FamilyServices(
            definition=definition,
            updator=updator,
            roots=roots,
            children=ChildContentService(roots),
        )

    async def close(self) -> None:
        """Close the connections this container opened."""
        if self._qdrant is not None:
            await self._qdrant.close()
            self._qdrant = None
            self._search_index = None

        if self._redis is not None:
            await self._redis.close()
            self._redis = None
            self._cache_store = None

        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None

        self._families.clear()
        logger.info("Content container closed")

    @classmethod
    @asynccontextmanager
    async def lifespan(cls, settings: Settings, **kwargs) -> AsyncIterator["ContentContainer"]:
        """Configure logging and start a container for the duration of a block."""
        setup_logging(settings)
        container = cls(settings, **kwargs)
        await container.start()
        try:
            yield container
        finally:
            await container.close()

    async def health(self) -> dict[str, bool]:
        """Report whether each backend is reachable.

        Injected cache and search backends are reported as reachable.
        """
        if self._redis is not None:
            cache = await self._redis.ping()
        else:
            cache = self.cache_enabled

        if self._qdrant is not None:
            search = await self._qdrant.ping()
        else:
            search = self._search_index is not None

        return {
            "database": await check_database_connection(self._sessionmaker),
            "cache": cache,
            "search": search,
        }

    # ========== Lookup ==========

    def family(self, name: str) -> FamilyServices:
        """Services of a family.

        Raises:
            ContentValidationError: If the family does not exist.
        """
        try:
            return self._families[name]
        except KeyError:
            raise ContentValidationError(f"Unknown content family: {name}", field="family") from None

    def roots(self, name: str) -> RootContentService:
        return self.family(name).roots

    def children(self, name: str) -> ChildContentService:
        return self.family(name).children

    async def resync_all(self) -> dict[str, ResyncReport]:
        """Republish every root of every family."""
        return {name: await services.roots.resync_all() for name, services in self._families.items()}
