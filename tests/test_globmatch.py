# -*- coding: utf-8 -*-
"""Tests for pattern helpers and `globmatch`."""
import unittest
import pytest
import copy
import pickle
import walkglob.glob as glob


class TestIsMagic(unittest.TestCase):
    """Test magic detection."""

    def test_default(self):
        """Test default magic characters."""

        self.assertTrue(glob.has_magic('a*'))
        self.assertTrue(glob.has_magic('a?'))
        self.assertTrue(glob.has_magic('[a]'))
        self.assertTrue(glob.has_magic('{a,b}'))
        self.assertFalse(glob.has_magic('src/lib/a.nim'))
        self.assertFalse(glob.has_magic(''))

    def test_extmatch(self):
        """Test extended pattern openers."""

        self.assertTrue(glob.has_magic('@(a)'))
        self.assertTrue(glob.has_magic('+(a)'))
        self.assertTrue(glob.has_magic('!(a)'))
        self.assertFalse(glob.has_magic('a!b'))
        self.assertFalse(glob.has_magic('a(b)'))
        self.assertFalse(glob.has_magic('a+b'))

    def test_escapes_ignored(self):
        """Test that escaped magic still counts."""

        self.assertTrue(glob.has_magic(r'\*'))


@pytest.mark.parametrize(
    "pattern,base,magic",
    [
        ('root/inner/**/*.{jpg,gif}', 'root/inner', '**/*.{jpg,gif}'),
        ('*.nim', '', '*.nim'),
        ('src/lib', '', 'src/lib'),
        ('src/*/x.nim', 'src', '*/x.nim'),
        ('*/x.nim', '', '*/x.nim'),
        ('/abs/*.txt', '/abs', '*.txt'),
        ('/*.txt', '/', '*.txt'),
        ('a//b/*', 'a//b', '*'),
        ('a//*', 'a', '*'),
        (r'a\/b*', '', r'a\/b*'),
        ('', '', '')
    ]
)
def test_split_pattern(pattern, base, magic):
    """Test splitting patterns into their literal and magic parts."""

    stems = glob.split_pattern(pattern)
    assert stems == (base, magic)
    assert stems.base == base
    assert stems.magic == magic


class TestFoldCase(unittest.TestCase):
    """Test case folding of literals."""

    def test_letters(self):
        """Test letters are turned into both cases."""

        self.assertEqual(glob.fold_case('ab1'), '[aA][bB]1')

    def test_escapes(self):
        """Test that escaped characters are left alone."""

        self.assertEqual(glob.fold_case(r'a\b'), r'[aA]\b')

    def test_empty(self):
        """Test empty literal."""

        self.assertEqual(glob.fold_case(''), '')

    def test_matches_any_case(self):
        """Test that the folded literal matches regardless of case."""

        g = glob.compile(glob.fold_case('ReadMe.md'), dos=False, ignore_case=False)
        self.assertTrue(glob.matches('README.MD', g))
        self.assertTrue(glob.matches('readme.md', g))
        self.assertFalse(glob.matches('readme.mdx', g))


class TestGlobMatch(unittest.TestCase):
    """Test matching against compiled and string patterns."""

    def test_compile(self):
        """Test compiled pattern fields."""

        g = glob.compile('src/**/*.nim', dos=False)
        self.assertEqual(g.pattern, 'src/**/*.nim')
        self.assertEqual(g.base, 'src')
        self.assertEqual(g.magic, '**/*.nim')
        self.assertEqual(g.regex_str, r'^(?s:src/(?:.*/)?[^/]*\.nim)$')
        self.assertEqual(g.regex.pattern, g.regex_str)

    def test_matches(self):
        """Test matching with strings and compiled patterns."""

        self.assertTrue(glob.matches('src/sub/b.nim', 'src/**/*.nim', dos=False))
        self.assertTrue(glob.matches('src/a.nim', glob.compile('src/**/*.nim', dos=False)))
        self.assertFalse(glob.matches('docs/x.svg', 'src/**/*.nim', dos=False))

    def test_matches_ignore_case(self):
        """Test case insensitive matching."""

        self.assertTrue(glob.matches('SRC/A.NIM', 'src/*.nim', dos=False, ignore_case=True))
        self.assertFalse(glob.matches('SRC/A.NIM', 'src/*.nim', dos=False, ignore_case=False))

    def test_matches_dos(self):
        """Test DOS style matching."""

        self.assertTrue(glob.matches('src\\a.nim', 'src/*.nim', dos=True))
        self.assertFalse(glob.matches('src/a.nim', 'src/*.nim', dos=True))

    def test_matches_pathlike(self):
        """Test that path like objects are accepted."""

        import pathlib

        self.assertTrue(glob.matches(pathlib.PurePosixPath('a.nim'), '*.nim', dos=False))

    def test_translate(self):
        """Test translate."""

        self.assertEqual(glob.translate('*.nim', dos=False, ignore_case=True), r'^(?si:[^/]*\.nim)$')

    def test_syntax_error(self):
        """Test that malformed patterns are reported."""

        with self.assertRaises(glob.GlobSyntaxError):
            glob.compile('[abc')

        with self.assertRaises(glob.GlobSyntaxError):
            glob.matches('a', '@(a')

    def test_limit(self):
        """Test the expansion limit."""

        with self.assertRaises(glob.PatternLimitException):
            glob.compile('{1..11}', limit=10)


class TestGlobObject(unittest.TestCase):
    """Test the compiled `Glob` object."""

    def test_hash(self):
        """Test hashing and equality."""

        g1 = glob.compile('*.nim', dos=False)
        g2 = glob.compile('*.nim', dos=False)
        g3 = glob.compile('*.nim', dos=False, ignore_case=True)
        g4 = glob.compile('*.txt', dos=False)

        self.assertTrue(g1 == g2)
        self.assertTrue(g1 != g3)
        self.assertTrue(g1 != g4)
        self.assertTrue(g1 != '*.nim')

        g5 = copy.copy(g1)
        self.assertTrue(g1 == g5)
        self.assertTrue(g5 in {g1})

    def test_immutable(self):
        """Test that the object can't be changed."""

        g = glob.compile('*.nim')
        with self.assertRaises(AttributeError):
            g.pattern = '*.txt'

    def test_pickle(self):
        """Test pickling."""

        g1 = glob.compile('src/*.nim', dos=False)
        g2 = pickle.loads(pickle.dumps(g1))
        self.assertEqual(g1, g2)
        self.assertEqual(g2.base, 'src')
        self.assertTrue(g2.match('src/a.nim'))

    def test_repr(self):
        """Test representation."""

        self.assertEqual(
            repr(glob.compile('src/*.nim')),
            "Glob(pattern='src/*.nim', base='src', magic='*.nim')"
        )
