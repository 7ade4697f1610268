"""POSIX character classes."""

# Raw character (ASCII) ranges only, expressed as the inside of a regex character class.
_POSIX_PROPERTIES = {
    "alnum": r"a-zA-Z0-9",
    "alpha": r"a-zA-Z",
    "ascii": r"\x00-\x7f",
    "blank": r" \t",
    "cntrl": r"\x00-\x1f\x7f",
    "digit": r"0-9",
    "graph": r"\x21-\x7e",
    "lower": r"a-z",
    "print": r"\x20-\x7e",
    "punct": r"!-\/:-@\[-`{-~",
    "space": r" \t\r\n\v\f",
    "upper": r"A-Z",
    "word": r"a-zA-Z0-9_",
    "xdigit": r"A-Fa-f0-9"
}


def get_posix_property(value):
    """Retrieve the POSIX class range for use inside a character class."""

    try:
        return _POSIX_PROPERTIES[value.lower()]
    except KeyError:
        raise ValueError("'{}' is not a valid POSIX class".format(value))
