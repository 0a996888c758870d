"""treecheck exceptions."""


class TreeCheckError(Exception):
    """Base exception for treecheck errors."""
    pass


class InvalidPathError(TreeCheckError):
    """Raised when a pathname cannot be parsed into a Path."""
    pass


class NoSuchChildError(TreeCheckError):
    """Raised when a child index is outside a node's children."""
    pass


class AlreadyInTreeError(TreeCheckError):
    """Raised when a path is inserted twice."""
    pass


class ConflictingPathError(TreeCheckError):
    """Raised when a path does not share the tree's root."""
    pass


class PathNotFoundError(TreeCheckError):
    """Raised when a path does not exist."""
    pass


class NotInitializedError(TreeCheckError):
    """Raised when a tree operation is attempted before init()."""
    pass


class AlreadyInitializedError(TreeCheckError):
    """Raised when init() is called on an initialized tree."""
    pass


class TreeCorruptedError(TreeCheckError):
    """Raised by a self-checking tree when an invariant is broken."""

    def __init__(self, violation):
        super().__init__(str(violation))
        self.violation = violation
