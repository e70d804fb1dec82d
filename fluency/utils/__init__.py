# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared utilities."""

from fluency.utils.logging import setup_logging

__all__ = ["setup_logging"]
