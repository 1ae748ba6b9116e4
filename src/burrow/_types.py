"""Shared type definitions for burrow."""

from typing import Literal

# Mode of operation
type BurrowMode = Literal["dev", "build", "routes"]

# Named partition of the route set (e.g., "global", "popup")
type Scope = str

# Route URL path (e.g., "/users/:id", "" for a default child)
type RoutePath = str

# Absolute path to a component file, as supplied by discovery
type FilePath = str

# Role of a file inside its directory
type FileRole = Literal["page", "layout", "parent"]
