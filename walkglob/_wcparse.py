"""
Walk Glob.

Translate glob patterns into regular expressions.

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
import re
import functools
import bracex
from . import util
from . import posix

PATTERN_LIMIT = 1000

RE_POSIX = re.compile(r':(alnum|alpha|ascii|blank|cntrl|digit|graph|lower|print|punct|space|upper|word|xdigit):\]')

EXT_TYPES = frozenset(('*', '?', '+', '@', '!'))

# Pieces to construct search path

# Star, never crosses a separator
_PATH_STAR = r'[^%(sep)s]*'
# Question mark, never a separator
_PATH_QMARK = r'[^%(sep)s]'
# `globstar` followed by a separator: zero or more directories
_PATH_GSTAR_DIR = r'(?:.*%(sep)s)?'
# `globstar` anywhere else: anything, including separators
_PATH_GSTAR = r'.*'
# Groups for extended patterns
_QMARK_GROUP = r'(?:%s)?'
_STAR_GROUP = r'(?:%s)*'
_PLUS_GROUP = r'(?:%s)+'
_GROUP = r'(?:%s)'


class GlobSyntaxError(ValueError):
    """Malformed glob pattern."""


class PatternLimitException(Exception):
    """Pattern limit exception."""


def _sequence_end(pattern, index):
    """
    Find the end of the character sequence opening at `index`.

    Returns the index just past the closing `]`, or `None` if the sequence
    is unterminated.
    """

    end = len(pattern)
    i = index + 1
    if i < end and pattern[i] in ('!', '^'):
        i += 1
    if i < end and pattern[i] == ']':
        i += 1

    while i < end:
        c = pattern[i]
        if c == '\\':
            i += 2
            continue
        if c == ']':
            return i + 1
        if c == '[':
            m = RE_POSIX.match(pattern, i + 1)
            if m:
                i = m.end()
                continue
        i += 1
    return None


def check_braces(pattern):
    """Make sure every opening brace has a closing brace."""

    depth = 0
    i = 0
    end = len(pattern)
    while i < end:
        c = pattern[i]
        if c == '\\':
            i += 2
            continue
        if c == '[':
            # Braces inside a character sequence are literal.
            index = _sequence_end(pattern, i)
            if index is not None:
                i = index
                continue
        elif c == '{':
            depth += 1
        elif c == '}' and depth:
            depth -= 1
        i += 1
    if depth:
        raise GlobSyntaxError("Unterminated brace group in pattern '{}'".format(pattern))


def expand_braces(pattern, limit=PATTERN_LIMIT):
    """Expand braces."""

    check_braces(pattern)
    # Turn off limit as we are handling it ourselves.
    for count, expanded in enumerate(bracex.iexpand(pattern, keep_escapes=True, limit=0), 1):
        if 0 < limit < count:
            raise PatternLimitException("Pattern limit exceeded the limit of {:d}".format(limit))
        yield expanded


class WcParse(object):
    """Parse the wildcard pattern."""

    def __init__(self, pattern, dos=False):
        """Initialize."""

        self.pattern = pattern
        self.dos = dos
        self.sep = '\\' if dos else '/'
        sep = {"sep": re.escape(self.sep)}
        self.path_star = _PATH_STAR % sep
        self.path_qmark = _PATH_QMARK % sep
        self.path_gstar_dir = _PATH_GSTAR_DIR % sep

    def error(self, message, i):
        """Raise a syntax error pointing at the current position."""

        raise GlobSyntaxError("{} at position {:d} in pattern '{}'".format(message, i.index, self.pattern))

    def _handle_posix(self, i, result):
        """Handle posix classes."""

        m = i.match(RE_POSIX)
        if m:
            result.append(posix.get_posix_property(m.group(1)))
        return m is not None

    def _sequence(self, i):
        """Handle character group."""

        result = ['[']
        start = i.index - 1
        terminated = True

        try:
            c = next(i)
            if c in ('!', '^'):
                # Handle negate char
                result.append('^' + re.escape(self.sep))
                c = next(i)
            if c in ('-', ']'):
                result.append(re.escape(c))
                c = next(i)

            while c != ']':
                if c == '[' and self._handle_posix(i, result):
                    c = next(i)
                    continue

                if c == '\\':
                    value = re.escape(next(i))
                elif c == '-':
                    # A trailing hyphen is literal, anything else is a range.
                    c = next(i)
                    if c == ']':
                        result.append(r'\-')
                        break
                    result.append('-')
                    continue
                else:
                    value = re.escape(c)

                result.append(value)
                c = next(i)
        except StopIteration:
            terminated = False

        if not terminated:
            i.rewind(i.index - start)
            self.error("Unterminated character class", i)

        result.append(']')
        return ''.join(result)

    def _references(self, i):
        """Handle references."""

        try:
            c = next(i)
        except StopIteration:
            # A lone trailing backslash is a literal backslash.
            return re.escape('\\')
        return re.escape(c)

    def _handle_star(self, i, current):
        """Handle star."""

        stars = 1
        try:
            c = next(i)
            while c == '*':
                stars += 1
                c = next(i)
            i.rewind(1)
        except StopIteration:
            pass

        if stars == 1:
            current.append(self.path_star)
            return

        try:
            c = next(i)
            if c == '/':
                current.append(self.path_gstar_dir)
                return
            i.rewind(1)
        except StopIteration:
            pass
        current.append(_PATH_GSTAR)

    def parse_extend(self, c, i, current):
        """Parse extended pattern lists."""

        index = i.index
        list_type = c
        try:
            c = next(i)
        except StopIteration:
            return False

        if c != '(':
            i.rewind(1)
            return False

        if list_type == '!':
            i.rewind(i.index - index + 1)
            self.error("Negated extended patterns are not supported", i)

        extended = []
        self._parse(i, extended, in_list=True)

        if list_type == '?':
            current.append(_QMARK_GROUP % ''.join(extended))
        elif list_type == '*':
            current.append(_STAR_GROUP % ''.join(extended))
        elif list_type == '+':
            current.append(_PLUS_GROUP % ''.join(extended))
        else:
            current.append(_GROUP % ''.join(extended))
        return True

    def _parse(self, i, current, in_list=False):
        """Parse characters until the end of the pattern or the end of the current list."""

        start = i.index
        for c in i:
            if c in EXT_TYPES and self.parse_extend(c, i, current):
                continue

            if c == '*':
                self._handle_star(i, current)
            elif c == '?':
                current.append(self.path_qmark)
            elif c == '/':
                current.append(re.escape(self.sep))
            elif c == '\\':
                current.append(self._references(i))
            elif c == '[':
                current.append(self._sequence(i))
            elif in_list and c == '|':
                current.append(c)
            elif in_list and c == ')':
                return
            else:
                current.append(re.escape(c))

        if in_list:
            i.rewind(i.index - start + 2)
            self.error("Unterminated extended pattern", i)

    def parse(self):
        """Parse pattern."""

        result = []
        i = util.StringIter(self.pattern)
        self._parse(i, result)
        return ''.join(result)


def translate(pattern, dos=False, ignore_case=False, limit=PATTERN_LIMIT):
    """Translate the pattern to a regular expression source string."""

    parts = []
    seen = set()
    for expanded in expand_braces(pattern, limit):
        if expanded not in seen:
            seen.add(expanded)
            parts.append(WcParse(expanded, dos).parse())

    case_flag = 'i' if ignore_case else ''
    return r'^(?s{}:{})$'.format(case_flag, '|'.join(parts))


@functools.lru_cache(maxsize=256, typed=True)
def _compile(pattern, dos, ignore_case, limit):
    """Compile the pattern to regex."""

    source = translate(pattern, dos, ignore_case, limit)
    try:
        return re.compile(source)
    except re.error as e:
        raise GlobSyntaxError("Invalid pattern '{}': {}".format(pattern, e)) from e


def compile_pattern(pattern, dos=False, ignore_case=False, limit=PATTERN_LIMIT):
    """Compile a glob pattern into a regular expression object."""

    return _compile(pattern, bool(dos), bool(ignore_case), limit)
