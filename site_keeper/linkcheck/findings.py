"""
Broken link findings.

Each kind of defect is its own record type with the fields it needs.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Union

from ..scanner.documents import Document


@dataclass(frozen=True)
class FragmentMissing:
    """A same-document fragment names an anchor the document lacks."""

    kind: ClassVar[str] = "fragment-missing"

    document: Document
    url: str
    fragment: str

    def describe(self) -> str:
        return f"{self.document.name}: {self.url} -> no element with id or name '{self.fragment}'"


@dataclass(frozen=True)
class DirectoryWithoutIndex:
    """A reference resolves to a directory that has no index.html."""

    kind: ClassVar[str] = "directory-without-index"

    document: Document
    url: str
    path: Path

    def describe(self) -> str:
        return f"{self.document.name}: {self.url} -> directory without index.html ({self.path})"


@dataclass(frozen=True)
class FileMissing:
    """A reference resolves to a file that does not exist."""

    kind: ClassVar[str] = "file-missing"

    document: Document
    url: str
    path: Path

    def describe(self) -> str:
        return f"{self.document.name}: {self.url} -> missing file ({self.path})"


BrokenLinkFinding = Union[FragmentMissing, DirectoryWithoutIndex, FileMissing]
