"""
Walk Glob.

Split, match and walk glob patterns against the file system.

Licensed under MIT
Copyright (c) 2018 - 2020 Isaac Muse <isaacmuse@gmail.com>

Permission is hereby granted, free of charge, to any person obtaining a copy of this software and associated
documentation files (the "Software"), to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of the Software,
and to permit persons to whom the Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all copies or substantial portions
of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED
TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL
THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF
CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
IN THE SOFTWARE.
"""
import copyreg
import enum
import logging
import os
import re
import stat
import string
from collections import namedtuple
from . import _wcparse
from . import util

__all__ = (
    "ABSOLUTE", "IGNORECASE", "NOEXPANDDIRS", "FOLLOW", "HIDDEN", "FILES", "DIRECTORIES", "FILELINKS", "DIRLINKS",
    "A", "I", "X", "L", "H", "F", "D", "FL", "DL",
    "DEFAULT_FLAGS", "IS_DOS", "FileKind", "Entry", "PatternStems", "Glob",
    "GlobSyntaxError", "PatternLimitException",
    "has_magic", "split_pattern", "fold_case", "resolve_literal", "expand_glob",
    "translate", "compile", "matches", "iwalk_kinds", "walk_kinds", "iwalk", "walk"
)

logger = logging.getLogger(__name__)

# Patterns compile to the platform separator unless told otherwise.
IS_DOS = util.platform() == "windows"

A = ABSOLUTE = 0x0001
I = IGNORECASE = 0x0002
X = NOEXPANDDIRS = 0x0004
L = FOLLOW = 0x0008
H = HIDDEN = 0x0010
F = FILES = 0x0020
D = DIRECTORIES = 0x0040
FL = FILELINKS = 0x0080
DL = DIRLINKS = 0x0100

FLAG_MASK = (
    ABSOLUTE |
    IGNORECASE |
    NOEXPANDDIRS |
    FOLLOW |
    HIDDEN |
    FILES |
    DIRECTORIES |
    FILELINKS |
    DIRLINKS
)

DEFAULT_FLAGS = FILES | FILELINKS | DIRLINKS | (0 if util.is_case_sensitive() else IGNORECASE)

PATTERN_LIMIT = _wcparse.PATTERN_LIMIT

GlobSyntaxError = _wcparse.GlobSyntaxError
PatternLimitException = _wcparse.PatternLimitException

RE_EXTGLOB = re.compile(r'[?!@+*]\(')
# A separator that is not escaped.
RE_SEP = re.compile(r'(?:^|[^\\])/')

MAGIC_CHARS = frozenset('*?[{')
# An escaped character.
RE_ESCAPE = re.compile(r'\\(.)', re.DOTALL)


class FileKind(enum.Enum):
    """Kind of a file system entry."""

    FILE = 'file'
    DIR = 'dir'
    LINK_TO_FILE = 'link_to_file'
    LINK_TO_DIR = 'link_to_dir'


ALL_KINDS = frozenset(FileKind)
DIR_KINDS = frozenset((FileKind.DIR, FileKind.LINK_TO_DIR))

_KIND_FLAGS = {
    FileKind.FILE: FILES,
    FileKind.DIR: DIRECTORIES,
    FileKind.LINK_TO_FILE: FILELINKS,
    FileKind.LINK_TO_DIR: DIRLINKS
}


class Entry(namedtuple('Entry', ['path', 'kind'])):
    """File system entry matched by a glob pattern."""


class PatternStems(namedtuple('PatternStems', ['base', 'magic'])):
    """
    Literal and magic parts of a glob pattern.

    `base` holds the leading path segments without glob syntax and
    `magic` holds the segments containing or following glob syntax.
    """


class Glob(util.Immutable):
    """Compiled glob pattern."""

    __slots__ = ("pattern", "regex_str", "regex", "base", "magic", "_hash")

    def __init__(self, pattern, regex_str, regex, base, magic):
        """Initialization."""

        super(Glob, self).__init__(
            pattern=pattern,
            regex_str=regex_str,
            regex=regex,
            base=base,
            magic=magic,
            _hash=hash((type(self), pattern, regex_str))
        )

    def __hash__(self):
        """Hash."""

        return self._hash

    def __eq__(self, other):
        """Equal."""

        return (
            isinstance(other, Glob) and
            self.pattern == other.pattern and
            self.regex_str == other.regex_str
        )

    def __ne__(self, other):
        """Not equal."""

        return not self.__eq__(other)

    def __repr__(self):
        """Representation."""

        return "{}(pattern={!r}, base={!r}, magic={!r})".format(
            type(self).__name__, self.pattern, self.base, self.magic
        )

    def match(self, filename):
        """Match filename."""

        return self.regex.fullmatch(os.fspath(filename)) is not None


def _pickle(p):
    return Glob, (p.pattern, p.regex_str, p.regex, p.base, p.magic)


copyreg.pickle(Glob, _pickle)


def has_magic(pattern):
    """
    Check if the pattern contains glob syntax.

    Any of `*`, `?`, `[` or `{` counts, as does an extended pattern
    opener (`?`, `!`, `@`, `+` or `*` followed by `(`). Escapes are not
    taken into account.
    """

    for c in MAGIC_CHARS:
        if c in pattern:
            return True
    return RE_EXTGLOB.search(pattern) is not None


def _split_head(path):
    """Strip the last path segment."""

    index = path.rfind('/')
    if index == -1:
        return ''
    head = path[:index].rstrip('/')
    return head if head else '/'


def split_pattern(pattern):
    """
    Split the pattern into its literal `base` and its `magic` remainder.

    When the pattern has no glob syntax, or no unescaped separator, the
    whole pattern is returned as `magic` and `base` is empty.
    """

    if not has_magic(pattern) or RE_SEP.search(pattern) is None:
        return PatternStems('', pattern)

    head = pattern
    while has_magic(head):
        head = _split_head(head)

    if not head:
        start = 0
    else:
        start = len(head)
        while pattern[start:start + 1] == '/':
            start += 1
    return PatternStems(head, pattern[start:])


def fold_case(literal):
    """Turn every letter of a literal into a bracket expression matching both cases."""

    result = []
    escaped = False
    for c in literal:
        if escaped:
            escaped = False
            result.append(c)
        elif c == '\\':
            escaped = True
            result.append(c)
        elif c in string.ascii_letters:
            result.append('[{}{}]'.format(c.lower(), c.upper()))
        else:
            result.append(c)
    return ''.join(result)


def _unescape(literal):
    """Remove backslash escapes from a literal."""

    return RE_ESCAPE.sub(r'\1', literal)


def _join(base, path):
    """Join path to base unless base is empty or path is absolute."""

    if not path:
        return base
    if not base or os.path.isabs(path):
        return path
    return os.path.join(base, path)


def _to_relative(path, directory):
    """Strip the directory prefix from path."""

    if not directory:
        return path
    prefix = directory if directory.endswith(os.sep) else directory + os.sep
    return path[len(prefix):] if path.startswith(prefix) else path


def _path_kind(path):
    """Get the kind of the path or `None` if it cannot be determined."""

    try:
        mode = os.lstat(path).st_mode
    except OSError as e:
        logger.debug("Unable to stat '%s': %s", path, e)
        return None

    if stat.S_ISLNK(mode):
        return FileKind.LINK_TO_DIR if os.path.isdir(path) else FileKind.LINK_TO_FILE
    return FileKind.DIR if stat.S_ISDIR(mode) else FileKind.FILE


def _entry_kind(entry):
    """Get the kind of a directory entry."""

    if entry.is_symlink():
        return FileKind.LINK_TO_DIR if entry.is_dir() else FileKind.LINK_TO_FILE
    return FileKind.DIR if entry.is_dir(follow_symlinks=False) else FileKind.FILE


def _fold_paths(path, root_dir):
    """
    Find the on disk paths matching a literal while ignoring case.

    Each segment is compared against the entries of its parent directory
    using the case folded form of the segment.
    """

    if path.startswith('/'):
        candidates = ['/']
        parts = path.split('/')[1:]
    else:
        candidates = [root_dir]
        parts = path.split('/')

    for part in parts:
        if part in ('', '.', '..'):
            candidates = [_join(c, part) if part else c for c in candidates]
            continue

        matcher = _wcparse.compile_pattern(fold_case(part))
        found = []
        for candidate in candidates:
            try:
                with os.scandir(candidate or os.curdir) as scan:
                    for f in scan:
                        if matcher.fullmatch(f.name):
                            found.append(_join(candidate, f.name))
            except OSError as e:
                logger.debug("Unable to list '%s': %s", candidate, e)
        candidates = found
        if not candidates:
            break

    return candidates


def _iter_literal(path, kinds=ALL_KINDS, ignore_case=False, root_dir=None):
    """Yield the entries a literal path refers to, in their on disk casing."""

    if not path:
        return

    if ignore_case and util.is_case_sensitive():
        paths = _fold_paths(path, root_dir or '')
    else:
        paths = [_join(root_dir or '', util.to_native(_unescape(path)))]

    for p in paths:
        kind = _path_kind(p)
        if kind in kinds:
            yield Entry(p, kind)


def resolve_literal(path, kinds=ALL_KINDS, ignore_case=False, root_dir=None):
    """
    Resolve a literal path to its on disk path and kind.

    Relative paths are resolved under `root_dir` (the current working
    directory by default). Returns `None` if nothing of the wanted kinds
    exists.
    """

    for entry in _iter_literal(path, kinds, ignore_case, root_dir):
        return entry
    return None


def expand_glob(pattern, ignore_case=False, root_dir=None):
    """Turn a literal directory pattern into a pattern matching everything below it."""

    if has_magic(pattern):
        return pattern

    if resolve_literal(pattern, DIR_KINDS, ignore_case, root_dir) is not None:
        return pattern + '/**'
    return pattern


def translate(pattern, dos=IS_DOS, ignore_case=IS_DOS, limit=PATTERN_LIMIT):
    """Translate the glob pattern to a regular expression string."""

    return _wcparse.translate(pattern, dos, ignore_case, limit)


def compile(pattern, dos=IS_DOS, ignore_case=IS_DOS, limit=PATTERN_LIMIT):  # noqa: A001
    """Pre-compile a glob pattern."""

    regex = _wcparse.compile_pattern(pattern, dos, ignore_case, limit)
    base, magic = split_pattern(pattern)
    return Glob(pattern, regex.pattern, regex, base, magic)


def matches(filename, pattern, dos=IS_DOS, ignore_case=IS_DOS, limit=PATTERN_LIMIT):
    """Check if filename matches the pattern or compiled `Glob`."""

    if isinstance(pattern, Glob):
        return pattern.match(filename)
    return _wcparse.compile_pattern(pattern, dos, ignore_case, limit).fullmatch(os.fspath(filename)) is not None


class _GlobWalk(object):
    """Walk the file system yielding the entries that match a glob pattern."""

    def __init__(self, pattern, root_dir=None, flags=DEFAULT_FLAGS, filter_descend=None, filter_yield=None):
        """Initialize the directory walker object."""

        if isinstance(pattern, Glob):
            self.glob = pattern
            self.pattern = pattern.pattern
        else:
            self.glob = None
            self.pattern = os.fspath(pattern)
        self.root_dir = os.fspath(root_dir) if root_dir else os.getcwd()
        self.filter_descend = filter_descend
        self.filter_yield = filter_yield
        self._parse_flags(flags)

    def _parse_flags(self, flags):
        """Parse flags."""

        self.flags = flags & FLAG_MASK
        self.absolute = bool(self.flags & ABSOLUTE)
        self.ignore_case = bool(self.flags & IGNORECASE)
        self.expand_dirs = not self.flags & NOEXPANDDIRS
        self.follow_links = bool(self.flags & FOLLOW)
        self.show_hidden = bool(self.flags & HIDDEN)

    def _wants(self, kind):
        """Check if entries of this kind are requested."""

        return bool(self.flags & _KIND_FLAGS[kind])

    def _is_hidden(self, path):
        """Check if path is hidden and hidden entries are excluded."""

        return not self.show_hidden and util.is_hidden(path)

    def _accept(self, path, kind):
        """Give the yield filter the last word."""

        return self.filter_yield is None or self.filter_yield(path, kind)

    def _descend(self, path):
        """Check if we may recurse into the directory."""

        return self.filter_descend is None or self.filter_descend(path)

    def format_path(self, path):
        """Format path relative to the root directory or as an absolute path."""

        return os.path.abspath(path) if self.absolute else _to_relative(path, self.root_dir)

    def _literal(self, pattern):
        """Yield the literal pattern's entry, returning the pattern to continue walking with."""

        entry = resolve_literal(pattern, ALL_KINDS, self.ignore_case, self.root_dir)
        if entry is None:
            return None

        path, kind = entry
        try:
            if self._is_hidden(path):
                return None
        except OSError as e:
            logger.debug("Unable to check if '%s' is hidden: %s", path, e)
            return None

        result = self.format_path(path)
        if kind in DIR_KINDS:
            if (
                self.flags & DIRECTORIES and
                (kind is FileKind.DIR or self.flags & DIRLINKS) and
                self._accept(result, kind)
            ):
                yield Entry(result, kind)
            if self.expand_dirs:
                return pattern + '/**'
        elif self._wants(kind) and self._accept(result, kind):
            yield Entry(result, kind)
        return None

    def _stems(self, pattern):
        """Get the base and magic parts of the pattern."""

        if self.glob is not None and pattern == self.glob.pattern:
            base = self.glob.base
            magic = expand_glob(self.glob.magic, self.ignore_case, _join(self.root_dir, util.to_native(base)))
            return base, magic
        return split_pattern(pattern)

    def _walk_magic(self, pattern):
        """Walk the directories below the literal base of the pattern."""

        base, magic = self._stems(pattern)
        matcher = _wcparse.compile_pattern(magic, IS_DOS, self.ignore_case)
        recursive = '**' in magic

        if base:
            starts = [entry.path for entry in _iter_literal(base, DIR_KINDS, self.ignore_case, self.root_dir)]
        else:
            starts = [self.root_dir]

        # Each frame is a directory to list and the start directory the matcher is relative to.
        stack = [(start, start) for start in reversed(starts)]
        # Links are only followed from directories outside the last followed one.
        last = starts[0] if starts else None
        while stack:
            subdir, start = stack.pop()
            try:
                scan = os.scandir(subdir)
            except OSError as e:
                logger.debug("Unable to list '%s': %s", subdir, e)
                continue

            with scan:
                for f in scan:
                    path = f.path
                    try:
                        kind = _entry_kind(f)
                        if self._is_hidden(path):
                            continue
                    except OSError as e:
                        logger.debug("Unable to query '%s': %s", path, e)
                        continue

                    is_match = matcher.fullmatch(_to_relative(path, start)) is not None
                    result = self.format_path(path)

                    if kind is FileKind.LINK_TO_DIR:
                        if is_match and self.flags & DIRLINKS and self._accept(result, kind):
                            yield Entry(result, kind)

                        if self.follow_links:
                            if last is not None and subdir.startswith(last + os.sep):
                                # Recursive symbolic link: following it would loop forever.
                                continue

                            last = subdir
                            if recursive and self._descend(result):
                                stack.append((path, start))

                    elif kind is FileKind.DIR:
                        if is_match and self.flags & DIRECTORIES and self._accept(result, kind):
                            yield Entry(result, kind)

                        if recursive and self._descend(result):
                            stack.append((path, start))

                    elif is_match and self._wants(kind) and self._accept(result, kind):
                        yield Entry(result, kind)

    def walk(self):
        """Starts off the walk iterator."""

        pattern = self.pattern
        if not has_magic(pattern):
            pattern = yield from self._literal(pattern)
            if pattern is None:
                return
        yield from self._walk_magic(pattern)


def iwalk_kinds(pattern, root_dir=None, *, flags=DEFAULT_FLAGS, filter_descend=None, filter_yield=None):
    """
    Iterate the entries matching the pattern, yielding `Entry` tuples of path and kind.

    `pattern` can be a string or a compiled `Glob`. `root_dir` defaults to the
    current working directory. `filter_descend(path)` can veto recursion into a
    directory and `filter_yield(path, kind)` can veto an entry. Paths are relative
    to `root_dir` unless `ABSOLUTE` is set.
    """

    yield from _GlobWalk(pattern, root_dir, flags, filter_descend, filter_yield).walk()


def walk_kinds(pattern, root_dir=None, *, flags=DEFAULT_FLAGS, filter_descend=None, filter_yield=None):
    """Get the entries matching the pattern as a list."""

    return list(
        iwalk_kinds(pattern, root_dir, flags=flags, filter_descend=filter_descend, filter_yield=filter_yield)
    )


def iwalk(pattern, root_dir=None, *, flags=DEFAULT_FLAGS, filter_descend=None, filter_yield=None):
    """Iterate the paths matching the pattern."""

    for entry in iwalk_kinds(pattern, root_dir, flags=flags, filter_descend=filter_descend, filter_yield=filter_yield):
        yield entry.path


def walk(pattern, root_dir=None, *, flags=DEFAULT_FLAGS, filter_descend=None, filter_yield=None):
    """Get the paths matching the pattern as a list."""

    return list(iwalk(pattern, root_dir, flags=flags, filter_descend=filter_descend, filter_yield=filter_yield))
