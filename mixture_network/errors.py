"""
Error taxonomy for the network derivation pipeline.

SchemaError and UnresolvedNodeReference are fatal. DuplicateCategoryConflict
is a data-quality warning: emitted through ``warnings`` under the default
first-seen policy, raised when derivation runs in strict mode.
"""
from typing import Iterable, Optional, Tuple


class NetworkError(Exception):
    """Base class for pipeline errors."""


class SchemaError(NetworkError, ValueError):
    """An input table is missing a required column or carries an unknown label."""

    def __init__(self, message: str, table: Optional[str] = None, columns: Iterable[str] = ()):
        self.table = table
        self.columns = tuple(columns)
        if table:
            message = f"{table}: {message}"
        super().__init__(message)


class UnresolvedNodeReference(NetworkError, KeyError):
    """An edge endpoint has no entry in the node lookup."""

    def __init__(self, key: Tuple[str, str]):
        self.key = key
        super().__init__(
            f"No node for {key[0]!r} ({key[1]}); nodes and edges must be "
            f"derived from the same rows"
        )

    def __str__(self) -> str:
        return self.args[0]


class DuplicateCategoryConflict(NetworkError, UserWarning):
    """One display name claimed by two categories."""

    def __init__(self, display_name: str, kept_category: str, claimed_category: str):
        self.display_name = display_name
        self.kept_category = kept_category
        self.claimed_category = claimed_category
        super().__init__(
            f"{display_name!r} appears as both {kept_category} and "
            f"{claimed_category}; keeping {kept_category} (first seen)"
        )
