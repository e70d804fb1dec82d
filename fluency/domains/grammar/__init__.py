# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grammar questions: fill-in-the-blank, choice, error identification and sentence transformation."""

from fluency.domains.grammar.family import build_definition, build_registry

__all__ = ["build_definition", "build_registry"]
