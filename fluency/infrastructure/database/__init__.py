# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Relational database infrastructure.

Example:
    from fluency.infrastructure.database import create_engine, create_sessionmaker, session_scope

    sessionmaker = create_sessionmaker(create_engine(settings.db.url))
    async with session_scope(sessionmaker) as session:
        ...
"""

from fluency.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    create_engine,
    create_sessionmaker,
    session_scope,
)
from fluency.infrastructure.database.repositories import ChildRepository, RootRepository

__all__ = [
    "DatabaseError",
    "check_database_connection",
    "create_engine",
    "create_sessionmaker",
    "session_scope",
    "ChildRepository",
    "RootRepository",
]
