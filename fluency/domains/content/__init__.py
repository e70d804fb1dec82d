# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Generic content services.

This package provides the pieces shared by every content family:
- Root and child write paths that publish after commit
- Cached detail reads and version sync
- Family definitions and input validation
"""

from fluency.domains.content.definition import (
    ChildKind,
    FamilyDefinition,
    validate_fields,
    validate_input,
)
from fluency.domains.content.service import (
    ChildContentService,
    ResyncReport,
    RootContentService,
    SearchPage,
)

__all__ = [
    "ChildKind",
    "FamilyDefinition",
    "validate_fields",
    "validate_input",
    "RootContentService",
    "ChildContentService",
    "SearchPage",
    "ResyncReport",
]
