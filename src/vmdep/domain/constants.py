from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the template-language markers (directives, comments, variable
sigils) and application-wide defaults shared by the scanner and the
configuration layer.
"""

from typing import List

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# TEMPLATE LANGUAGE
# -----------------------------------------------------------------------------

DEFAULT_DIRECTIVES: List[str] = ["parse", "include"]
DEFAULT_EXTENSION = ".vm"
DEFAULT_ENCODING = "utf-8"

LINE_COMMENT = "##"
BLOCK_COMMENT_OPEN = "#*"
BLOCK_COMMENT_CLOSE = "*#"

# Sigil, optional silent marker, optional brace, then an identifier start
VARIABLE_PATTERN = r"\$!?\{?[a-zA-Z]"

# -----------------------------------------------------------------------------
# APPLICATION
# -----------------------------------------------------------------------------

APP_DIR_NAME = "vmdep"
UNIX_APP_DIR_NAME = ".vmdep"
CONFIG_FILE_NAME = "config.json"
LOG_FILE_NAME = "vmdep.log"
