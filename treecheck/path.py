"""Hierarchical paths."""

from functools import total_ordering
from typing import Tuple

from treecheck.exceptions import InvalidPathError

SEPARATOR = "/"


@total_ordering
class Path:
    """Immutable hierarchical identifier such as ``/a/b/c``.

    Paths are ordered by their pathname string, which is the order
    children are stored in. ``/`` is the root path of depth 0.

    Example:
        >>> p = Path.from_string("/a/b/c")
        >>> p.depth
        3
        >>> p.shared_prefix_depth(Path.from_string("/a/x"))
        1
    """

    __slots__ = ("_components", "_pathname")

    def __init__(self, components: Tuple[str, ...]):
        for component in components:
            if not component or component in (".", "..") or SEPARATOR in component:
                raise InvalidPathError(f"Invalid path component: {component!r}")
        self._components = tuple(components)
        self._pathname = SEPARATOR + SEPARATOR.join(self._components)

    @classmethod
    def from_string(cls, pathname: str) -> "Path":
        """Parse a pathname. The leading slash is optional."""
        if not isinstance(pathname, str) or not pathname:
            raise InvalidPathError(f"Invalid pathname: {pathname!r}")
        stripped = pathname
        if stripped.startswith(SEPARATOR):
            stripped = stripped[1:]
        if stripped.endswith(SEPARATOR):
            stripped = stripped[:-1]
        if not stripped:
            if pathname == SEPARATOR:
                return cls(())
            raise InvalidPathError(f"Invalid pathname: {pathname!r}")
        try:
            return cls(tuple(stripped.split(SEPARATOR)))
        except InvalidPathError:
            raise InvalidPathError(f"Invalid pathname: {pathname!r}") from None

    @property
    def components(self) -> Tuple[str, ...]:
        return self._components

    @property
    def depth(self) -> int:
        """Number of components."""
        return len(self._components)

    @property
    def pathname(self) -> str:
        return self._pathname

    @property
    def name(self) -> str:
        """Last component, empty for the root path."""
        return self._components[-1] if self._components else ""

    def shared_prefix_depth(self, other: "Path") -> int:
        """Number of leading components identical in both paths."""
        shared = 0
        for mine, theirs in zip(self._components, other._components):
            if mine != theirs:
                break
            shared += 1
        return shared

    def prefix(self, depth: int) -> "Path":
        """The path made of the first ``depth`` components."""
        if depth < 0 or depth > self.depth:
            raise InvalidPathError(
                f"No prefix of depth {depth} in {self._pathname}")
        return Path(self._components[:depth])

    def child(self, name: str) -> "Path":
        return Path(self._components + (name,))

    def compare(self, other: "Path") -> int:
        """Three-way comparison by pathname: negative, zero or positive."""
        if self._pathname < other._pathname:
            return -1
        if self._pathname > other._pathname:
            return 1
        return 0

    def __eq__(self, other):
        if not isinstance(other, Path):
            return NotImplemented
        return self._pathname == other._pathname

    def __lt__(self, other):
        if not isinstance(other, Path):
            return NotImplemented
        return self._pathname < other._pathname

    def __hash__(self):
        return hash(self._pathname)

    def __str__(self):
        return self._pathname

    def __repr__(self):
        return f"Path({self._pathname!r})"
