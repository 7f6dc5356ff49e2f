"""
Pattern compilation and matching for single ignore rules
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import pathspec

from ..errors import PatternCompileError
from ..constants import NEGATION_PREFIX

GLOBSTAR = '**'

# Regex group pathspec sets where a directory pattern's descendants begin
DIR_MARK = 'ps_d'


def _compile_spec(pattern: str) -> pathspec.PathSpec:
    return pathspec.PathSpec.from_lines('gitwildmatch', [pattern])


@dataclass(frozen=True)
class CompiledPattern:
    """
    One compiled ignore rule.

    The negation prefix is recorded in ``negated`` and stripped before
    compiling, so ``matches`` reports whether the core pattern hit and the
    caller decides what a hit means. Negated rules only hit the path they
    name, never the contents of a directory they name.
    """
    pattern: str
    negated: bool
    source: Optional[str] = None
    _spec: pathspec.PathSpec = field(default=None, repr=False, compare=False)
    # One matcher per pattern segment, None for '**'. Empty for basename patterns.
    _segments: Tuple[Optional[pathspec.PathSpec], ...] = field(default=(), repr=False, compare=False)

    def matches(self, path: str, partial: bool = False) -> bool:
        """
        Test a path rooted at the rule's directory.

        Args:
            path: Path such as ``/a/b`` or ``a/b/``
            partial: Also report a hit when the pattern could match
                something inside ``path``

        Returns:
            True on a hit
        """
        if self.negated:
            hit = self._self_match(path)
        else:
            hit = self._spec.match_file(path)
        if hit:
            return True
        if partial:
            return self._partial_match(path)
        return False

    def _self_match(self, path: str) -> bool:
        # gitwildmatch hits every descendant of a matched directory; a
        # negated rule only re-includes the path it names.
        regexes = [p.regex for p in self._spec.patterns if p.regex is not None]
        if not regexes:
            return False

        if path.startswith('/'):
            path = path[1:]
        for regex in regexes:
            match = regex.match(path)
            if match is None:
                continue
            if DIR_MARK not in regex.groupindex or match.group(DIR_MARK) is None:
                return True
            if match.end(DIR_MARK) == len(path):
                return True
        return False

    def _partial_match(self, path: str) -> bool:
        if not self._segments:
            return False

        parts = [p for p in path.split('/') if p]
        if not parts:
            return False

        for i, name in enumerate(parts):
            if i >= len(self._segments):
                return False
            segment = self._segments[i]
            if segment is None:
                return True
            if not segment.match_file(name):
                return False
        # Only a strict prefix leaves room for something inside
        return len(parts) < len(self._segments)

    def __str__(self) -> str:
        return (NEGATION_PREFIX if self.negated else '') + self.pattern


def compile_pattern(text: str, source: Optional[str] = None) -> CompiledPattern:
    """
    Compile one ignore-file line.

    Args:
        text: Rule text, optionally prefixed with ``!``
        source: Basename of the ignore file the rule came from

    Returns:
        CompiledPattern

    Raises:
        PatternCompileError: If pathspec rejects the pattern
    """
    pattern = text.strip()
    negated = pattern.startswith(NEGATION_PREFIX)
    if negated:
        pattern = pattern[len(NEGATION_PREFIX):]

    try:
        spec = _compile_spec(pattern)
        segments = _compile_segments(pattern)
    except ValueError as e:
        raise PatternCompileError(text, str(e), source) from e

    return CompiledPattern(
        pattern=pattern,
        negated=negated,
        source=source,
        _spec=spec,
        _segments=segments,
    )


def _compile_segments(pattern: str) -> Tuple[Optional[pathspec.PathSpec], ...]:
    # Slash-less patterns match by basename at any depth, so they have no
    # directory prefix to partially match.
    body = pattern.strip('/')
    if '/' not in body:
        return ()

    segments = []
    for part in body.split('/'):
        if part == GLOBSTAR:
            segments.append(None)
        else:
            segments.append(_compile_spec('/' + part))
    return tuple(segments)
