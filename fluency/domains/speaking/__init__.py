# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Speaking questions: repetition drills, open paragraphs and conversations."""

from fluency.domains.speaking.family import build_definition, build_registry

__all__ = ["build_definition", "build_registry"]
