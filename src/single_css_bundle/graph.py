"""In-memory model of a finished build's outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass
class StylesheetAsset:
    """A static stylesheet emitted by the build."""

    file_name: str
    source: str | bytes | None = None
    name: str | None = None


@dataclass
class ChunkAsset:
    """A generated script chunk and the stylesheets it imports."""

    file_name: str
    imported_stylesheets: list[str] = field(default_factory=list)


Asset = Union[StylesheetAsset, ChunkAsset]

# Output path -> asset. Insertion order is the build's emission order and
# decides the concatenation order of merged stylesheets.
OutputGraph = dict[str, Asset]
