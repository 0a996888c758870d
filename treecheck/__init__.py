"""treecheck: consistency checks for directory trees."""

from treecheck.checker import (
    DiagnosticCollector,
    TreeChecker,
    Violation,
    ViolationKind,
    is_valid,
    node_is_valid,
)
from treecheck.exceptions import (
    TreeCheckError,
    InvalidPathError,
    NoSuchChildError,
    AlreadyInTreeError,
    ConflictingPathError,
    PathNotFoundError,
    NotInitializedError,
    AlreadyInitializedError,
    TreeCorruptedError,
)
from treecheck.node import Node, walk
from treecheck.path import Path
from treecheck.tree import DirectoryTree

__version__ = "0.1.0"
__all__ = [
    "TreeChecker",
    "DiagnosticCollector",
    "Violation",
    "ViolationKind",
    "is_valid",
    "node_is_valid",
    "Node",
    "Path",
    "DirectoryTree",
    "walk",
    "TreeCheckError",
    "InvalidPathError",
    "NoSuchChildError",
    "AlreadyInTreeError",
    "ConflictingPathError",
    "PathNotFoundError",
    "NotInitializedError",
    "AlreadyInitializedError",
    "TreeCorruptedError",
]
