"""
Shared constants for ignore file processing
"""

# Conventional ignore filename, used when no names are configured
IGNORE_FILENAME = ".ignore"

DEFAULT_IGNORE_FILES = (IGNORE_FILENAME,)

# Literal sort policy name for case-insensitive alphabetical order
ALPHA_SORT = "alpha"

# Read size for streaming ignore file content
READ_CHUNK_SIZE = 64 * 1024

# Negation prefix and comment marker in ignore files
NEGATION_PREFIX = "!"
COMMENT_PREFIX = "#"
