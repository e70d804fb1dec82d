# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Courses with their book or other record and their lessons."""

from fluency.domains.course.family import build_definition, build_registry

__all__ = ["build_definition", "build_registry"]
