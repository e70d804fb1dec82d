# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Reading questions: fill-in-the-blank, choice, true/false and matching."""

from fluency.domains.reading.family import build_definition, build_registry

__all__ = ["build_definition", "build_registry"]
