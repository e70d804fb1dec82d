# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Writing questions: sentence completion and essays."""

from fluency.domains.writing.family import build_definition, build_registry

__all__ = ["build_definition", "build_registry"]
