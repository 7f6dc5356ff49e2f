"""
Ignore-rule handling for fsignore

This module provides the per-directory ignore node that:
- Reads ignore files as they are discovered during a walk
- Cascades rules from the root directory down to each entry
- Lets negated rules re-include entries, including directories that lead
  to a re-included descendant
"""

from ..constants import IGNORE_FILENAME
from .node import IgnoreNode, resolve_sort
from .patterns import CompiledPattern, compile_pattern
from .rules import alphasort, is_rule_line, split_rules

__all__ = [
    'IGNORE_FILENAME',
    'IgnoreNode',
    'resolve_sort',
    'CompiledPattern',
    'compile_pattern',
    'alphasort',
    'is_rule_line',
    'split_rules',
]
