# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package.

Example:
    >>> from fluency.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from fluency.core.config.settings import (
    CacheSettings,
    DatabaseSettings,
    QdrantSettings,
    RedisSettings,
    Settings,
    SyncSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "DatabaseSettings",
    "RedisSettings",
    "QdrantSettings",
    "CacheSettings",
    "SyncSettings",
]
