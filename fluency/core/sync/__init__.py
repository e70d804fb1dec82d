# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Cache/search synchronization engine.

On every committed write the owning root's detail is rebuilt from the
database, classified complete/uncomplete and republished to the cache and
the search index.
"""

from fluency.core.sync.builder import DetailBuilder
from fluency.core.sync.cache_writer import CachedDetail, CacheKey, DetailCache
from fluency.core.sync.completion import (
    AllOf,
    CompletionClassifier,
    CompletionRule,
    MinRows,
    Present,
    SubQuestionWithItems,
)
from fluency.core.sync.detail import CompletionStatus, ContentDetail, DetailModel
from fluency.core.sync.errors import (
    DetailBuildError,
    PublishError,
    SyncError,
    UnknownContentTypeError,
)
from fluency.core.sync.family import ContentFamily
from fluency.core.sync.interfaces import CacheStore, SearchIndex
from fluency.core.sync.loaders import (
    BaseBranchLoader,
    FirstRowLoader,
    LessonsLoader,
    RowsLoader,
    SubQuestionLoader,
)
from fluency.core.sync.registry import ContentTypeHandler, ContentTypeRegistry
from fluency.core.sync.search_upserter import SearchUpserter, to_document
from fluency.core.sync.updator import ContentUpdator, SyncResult, SyncWarning

__all__ = [
    # Detail
    "ContentDetail",
    "DetailModel",
    "CompletionStatus",
    "ContentFamily",
    # Type dispatch
    "ContentTypeHandler",
    "ContentTypeRegistry",
    "BaseBranchLoader",
    "SubQuestionLoader",
    "RowsLoader",
    "FirstRowLoader",
    "LessonsLoader",
    # Completion
    "CompletionRule",
    "CompletionClassifier",
    "SubQuestionWithItems",
    "MinRows",
    "Present",
    "AllOf",
    # Pipeline
    "DetailBuilder",
    "DetailCache",
    "CacheKey",
    "CachedDetail",
    "SearchUpserter",
    "to_document",
    "ContentUpdator",
    "SyncResult",
    "SyncWarning",
    # Interfaces
    "CacheStore",
    "SearchIndex",
    # Errors
    "SyncError",
    "UnknownContentTypeError",
    "DetailBuildError",
    "PublishError",
]
