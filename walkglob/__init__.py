"""
Walk Glob.

Match glob patterns and walk the file system for the entries they select.

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
import logging
from .__meta__ import __version_info__, __version__  # noqa: F401
from .glob import (  # noqa: F401
    ABSOLUTE, IGNORECASE, NOEXPANDDIRS, FOLLOW, HIDDEN, FILES, DIRECTORIES, FILELINKS, DIRLINKS,
    A, I, X, L, H, F, D, FL, DL,
    DEFAULT_FLAGS, IS_DOS, FileKind, Entry, PatternStems, Glob,
    GlobSyntaxError, PatternLimitException,
    has_magic, split_pattern, fold_case, resolve_literal, expand_glob,
    translate, compile, matches, iwalk_kinds, walk_kinds, iwalk, walk
)
from .glob import __all__ as _glob_all

__all__ = _glob_all

# Leave output to the application.
logging.getLogger(__name__).addHandler(logging.NullHandler())
