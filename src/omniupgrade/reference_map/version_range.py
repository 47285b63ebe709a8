# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Version-range predicates used by reference map match rules.

Accepted notations:
    - ``None``, ``""`` or ``"*"``: any version.
    - PEP 440 specifier sets: ``">=5.0,<6.0"``, ``"~=2.1"``, ``"==1.*"``.
    - NuGet interval notation: ``"[5.0,6.0)"``, ``"(,2.0]"``, ``"[1.0]"``.
    - Anything else: an exact version. Compared as parsed versions when both
      sides parse, otherwise as case-insensitive text.

An unspecified reference version (``None``) is accepted by every range.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

_SPECIFIER_PREFIXES = ("<", ">", "=", "!", "~")

_INTERVAL_RE = re.compile(
    r"^(?P<open>[\[(])\s*(?P<low>[^,\s\])]*)\s*"
    r"(?:(?P<comma>,)\s*(?P<high>[^\s\])]*)\s*)?(?P<close>[\])])$"
)


@dataclass(frozen=True)
class VersionRange:
    """Parsed version predicate.

    Exactly one of ``specifier`` / ``exact`` is set, or neither for "any".
    """

    raw: str | None
    specifier: SpecifierSet | None = None
    exact: str | None = None

    @property
    def is_any(self) -> bool:
        return self.specifier is None and self.exact is None

    def contains(self, version: str | None) -> bool:
        """Return True if ``version`` satisfies this range."""
        if version is None or self.is_any:
            return True
        if self.specifier is not None:
            try:
                parsed = Version(version)
            except InvalidVersion:
                return False
            return self.specifier.contains(parsed, prereleases=True)
        assert self.exact is not None
        try:
            return Version(version) == Version(self.exact)
        except InvalidVersion:
            return version.casefold() == self.exact.casefold()


def _interval_to_specifier(raw: str) -> SpecifierSet | str:
    match = _INTERVAL_RE.match(raw)
    if match is None:
        raise ValueError(f"Invalid version interval {raw!r}")
    low, high = match["low"], match["high"]
    inclusive_low = match["open"] == "["
    inclusive_high = match["close"] == "]"

    if match["comma"] is None:
        # "[1.0]" pins a single version
        if not (inclusive_low and inclusive_high and low):
            raise ValueError(f"Invalid version interval {raw!r}")
        return low

    clauses: list[str] = []
    if low:
        clauses.append(f"{'>=' if inclusive_low else '>'}{low}")
    if high:
        clauses.append(f"{'<=' if inclusive_high else '<'}{high}")
    return SpecifierSet(",".join(clauses))


@lru_cache(maxsize=512)
def parse_version_range(raw: str | None) -> VersionRange:
    """Parse a version-range string.

    Args:
        raw: Range notation (see module docstring).

    Returns:
        A frozen ``VersionRange``.

    Raises:
        ValueError: If the notation looks like a range but cannot be parsed.
    """
    text = raw.strip() if raw is not None else ""
    if not text or text == "*":
        return VersionRange(raw=raw)

    try:
        if text[0] in "[(":
            spec = _interval_to_specifier(text)
            if isinstance(spec, str):
                return VersionRange(raw=raw, exact=spec)
            if not str(spec):
                return VersionRange(raw=raw)
            return VersionRange(raw=raw, specifier=spec)
        if text.startswith(_SPECIFIER_PREFIXES) or "*" in text:
            if not text.startswith(_SPECIFIER_PREFIXES):
                text = f"=={text}"
            return VersionRange(raw=raw, specifier=SpecifierSet(text))
    except InvalidSpecifier as exc:
        raise ValueError(f"Invalid version range {raw!r}: {exc}") from exc

    return VersionRange(raw=raw, exact=text)


__all__ = ["VersionRange", "parse_version_range"]
