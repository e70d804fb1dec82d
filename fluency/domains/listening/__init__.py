# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Listening questions: fill-in-the-blank, choice, map labelling and matching."""

from fluency.domains.listening.family import build_definition, build_registry

__all__ = ["build_definition", "build_registry"]
