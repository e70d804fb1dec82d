# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fluency content backend.

Question banks (listening, reading, grammar, speaking, writing) and courses stored in a
relational database, with every committed change republished to a Redis
cache and a Qdrant document index.
"""

__version__ = "0.1.0"
