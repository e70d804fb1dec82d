# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Detail builder.

Assembles the detail aggregate of a root by running the loaders registered
for its type. Reads go through a session of their own, not the caller's
transaction, so the build always sees committed state.
"""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fluency.core.sync.detail import ContentDetail
from fluency.core.sync.errors import DetailBuildError, UnknownContentTypeError
from fluency.core.sync.family import ContentFamily

logger = logging.getLogger(__name__)


class DetailBuilder:
    """Builds detail aggregates for one content family.

    Attributes:
        family: The content family.
    """

    def __init__(
        self,
        family: ContentFamily,
        sessionmaker: async_sessionmaker[AsyncSession],
    ) -> None:
        self.family = family
        self._sessionmaker = sessionmaker

    async def build(self, root: Any) -> ContentDetail:
        """Build the detail aggregate of a root entity.

        Args:
            root: Root ORM entity (or any object exposing its fields).

        Returns:
            Detail with root fields, the branch of the root's type and the
            family's shared branches. Other branches stay None.

        Raises:
            UnknownContentTypeError: If the root's type is not registered.
            DetailBuildError: If reading children fails.
        """
        registry = self.family.registry
        handler = registry.get(root.type)
        if handler is None:
            raise UnknownContentTypeError(self.family.name, root.type, root.id)

        branches: dict[str, Any] = {}
        try:
            async with self._sessionmaker() as session:
                for loader in (*registry.shared_loaders, *handler.loaders):
                    branches.update(await loader.load(session, root.id))
        except SQLAlchemyError as e:
            logger.error(
                "Failed to load %s children for %s",
                self.family.name,
                root.id,
                extra={"family": self.family.name, "root_id": str(root.id), "type": root.type},
            )
            raise DetailBuildError(self.family.name, root.id, root.type, e) from e

        detail = self.family.detail_model.model_validate(root)
        return detail.model_copy(update=branches)
