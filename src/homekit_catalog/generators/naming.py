"""Identifier policy shared by the code generators.

Every emitted identifier is drawn from an :class:`IdentifierAllocator`, one
per target namespace (type constants, wrapper types, the accessors of one
service, ...). Allocation is deterministic given the order of requests, and
the generators always request names in sorted catalog order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable


def sanitize(raw: str) -> str:
    """Keep only letters, digits and underscores."""
    return "".join(ch for ch in raw if ch.isalnum() or ch == "_")


def lower_camel_identifier(raw: str) -> str:
    """Sanitize and lower-case the first character (``PowerState`` -> ``powerState``)."""
    cleaned = sanitize(raw)
    return cleaned[:1].lower() + cleaned[1:]


def upper_camel_identifier(raw: str) -> str:
    """Sanitize and upper-case the first character (``pM10Density`` -> ``PM10Density``)."""
    cleaned = sanitize(raw)
    return cleaned[:1].upper() + cleaned[1:]


def screaming_snake_identifier(raw: str) -> str:
    """Convert a camel-case name to ``SCREAMING_SNAKE_CASE``.

    An underscore is inserted before an upper-case letter that follows a
    lower-case letter or digit, so acronyms stay together.

    Examples:
    --------
        >>> screaming_snake_identifier("currentTemperature")
        'CURRENT_TEMPERATURE'
        >>> screaming_snake_identifier("pM10Density")
        'P_M10_DENSITY'

    """
    result: list[str] = []
    previous_was_upper = True
    for ch in raw:
        if ch.isupper():
            if not previous_was_upper and result:
                result.append("_")
            result.append(ch)
            previous_was_upper = True
        else:
            result.append(ch.upper())
            previous_was_upper = False
    return sanitize("".join(result))


def type_name(raw: str, suffix: str) -> str:
    """Build an upper-camel type name ending in ``suffix`` exactly once."""
    base = upper_camel_identifier(raw)
    if base.lower().endswith(suffix.lower()):
        base = base[: -len(suffix)]
    if not base:
        return ""
    return f"{upper_camel_identifier(base)}{suffix}"


class IdentifierAllocator:
    """Hand out unique, legal identifiers within one namespace.

    For each request the candidate is the normalized primary name, or the
    normalized fallback when that is empty. A reserved candidate gets the
    role word appended, a candidate starting with a digit gets a ``_``
    prefix, and a candidate already handed out gets the first free numeric
    suffix starting at 2.

    Usage:
        allocator = IdentifierAllocator(reserved={"serviceType"}, role_word="Service")
        allocator.allocate("lightbulb", "Lightbulb")   # 'lightbulb'
        allocator.allocate("lightbulb", "Lightbulb")   # 'lightbulb2'
    """

    def __init__(
        self,
        reserved: Iterable[str] = (),
        role_word: str = "",
        normalize: Callable[[str], str] = lower_camel_identifier,
    ) -> None:
        """Initialize an empty namespace.

        Args:
        ----
            reserved: Names that must not be emitted as-is in this namespace.
            role_word: Word appended to reserved candidates.
            normalize: Converts a raw name into the namespace's casing.

        """
        self._reserved = frozenset(reserved)
        self._role_word = role_word
        self._normalize = normalize
        self._used: set[str] = set()

    def allocate(self, primary: str, fallback: str = "") -> str:
        """Return a fresh identifier for ``primary`` (or ``fallback``)."""
        candidate = self._normalize(primary) or self._normalize(fallback)
        if not candidate:
            candidate = self._normalize(self._role_word) or "_"

        if candidate in self._reserved:
            candidate += self._role_word
        if candidate[0].isdigit():
            candidate = f"_{candidate}"

        unique = candidate
        index = 2
        while unique in self._used:
            unique = f"{candidate}{index}"
            index += 1
        self._used.add(unique)
        return unique

    def __contains__(self, name: object) -> bool:
        return name in self._used


def doc_text(documentation: str | None, default: str) -> str:
    """Pick the documentation for a generated comment, flattened to one line."""
    text = documentation if documentation else default
    return " ".join(text.split("\n"))
