"""Shared constants for contract layout."""

from __future__ import annotations

import os

EPSILON = 1e-6
FALLBACK_REGULAR_FONT = "Helvetica"
FALLBACK_BOLD_FONT = "Helvetica-Bold"
SUBTITLE_SPACE_FACTOR = 1.2
SUBTITLE_ADVANCE_FACTOR = 1.15
BLANK_GAP_FACTOR = 0.55
UNDERLINE_OFFSET = 2.0
UNDERLINE_WIDTH = 0.7
DEBUG_PAGINATION = os.getenv("DEBUG_PAGINATION", "0") not in {
    "",
    "0",
    "false",
    "False",
}
