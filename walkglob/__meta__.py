"""Meta related things."""
from collections import namedtuple

RELEASE_LEVEL = ('alpha', 'beta', 'candidate', 'final')


class Version(namedtuple("Version", ["major", "minor", "micro", "release", "pre", "post", "dev"])):
    """
    Get the version (PEP 440).

    A biased approach to the PEP 440 semantic version.

    Provides a tuple structure which is sorted for comparisons `v1 > v2` etc.
      (major, minor, micro, release type, pre-release build, post-release build, development release build)
    Release types are named in is such a way they are comparable with ease.
    """

    def __new__(cls, major, minor, micro, release="final", pre=0, post=0, dev=0):
        """Validate version info."""

        for value in (major, minor, micro, pre, post):
            if not (isinstance(value, int) and value >= 0):
                raise ValueError("All version parts except 'release' should be integers.")

        if release not in RELEASE_LEVEL:
            raise ValueError("'{}' is not a valid release type.".format(release))

        if release != 'final' and not pre:
            raise ValueError("Pre-releases require a pre-release build number.")
        if release == 'final' and pre:
            raise ValueError("Final releases cannot have a pre-release build number.")

        return super(Version, cls).__new__(cls, major, minor, micro, release, pre, post, dev)

    def _get_canonical(self):
        """Get the canonical output string."""

        if self.micro == 0:
            ver = "{}.{}".format(self.major, self.minor)
        else:
            ver = "{}.{}.{}".format(self.major, self.minor, self.micro)
        if self.release != 'final':
            ver += "{}{}".format(self.release[0] if self.release != 'candidate' else 'rc', self.pre)
        if self.post:
            ver += ".post{}".format(self.post)
        if self.dev:
            ver += ".dev{}".format(self.dev)

        return ver


__version_info__ = Version(1, 0, 0, "final")
__version__ = __version_info__._get_canonical()
