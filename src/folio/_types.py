"""Shared type definitions for folio."""

from typing import Literal, TypeAlias

# Mode of operation
FolioMode: TypeAlias = Literal["build", "watch"]

# Route URL path (e.g., "/", "/blog/today")
RoutePath: TypeAlias = str

# Kind of filesystem change reported by the watcher
ChangeKind: TypeAlias = Literal["created", "modified", "deleted"]

# Which watched directory a change belongs to
ChangeCategory: TypeAlias = Literal["content", "template", "asset"]
