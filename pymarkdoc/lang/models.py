"""Data models describing a documented Python package."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class BlockKind(Enum):
    """Kinds of blocks a docstring is split into."""
    PARAGRAPH = "paragraph"
    CODE = "code"
    HEADER = "header"


@dataclass
class DocBlock:
    """A paragraph, code sample or header within a docstring."""
    kind: BlockKind
    text: str


@dataclass
class Repo:
    """Source repository information used to build links to the code."""
    remote: str = ""
    default_branch: str = ""
    path_from_root: str = ""


@dataclass
class Location:
    """Position of a symbol in its source file, relative to the package dir."""
    file: str
    start: int
    end: int


@dataclass
class Value:
    """A module or class level assignment."""
    name: str
    signature: str
    location: Location
    doc: str = ""


@dataclass
class Func:
    """A function, or a method when ``receiver`` is set."""
    name: str
    signature: str
    location: Location
    doc: str = ""
    receiver: Optional[str] = None

    @property
    def title(self) -> str:
        if self.receiver:
            return f"{self.receiver}.{self.name}"
        return self.name


@dataclass
class Type:
    """A class with its documented members."""
    name: str
    signature: str
    location: Location
    doc: str = ""
    bases: List[str] = field(default_factory=list)
    attributes: List[Value] = field(default_factory=list)
    methods: List[Func] = field(default_factory=list)


@dataclass
class Package:
    """Documentation model for one package directory or module."""
    name: str
    import_path: str
    dir: str
    doc: str = ""
    modules: List[str] = field(default_factory=list)
    values: List[Value] = field(default_factory=list)
    funcs: List[Func] = field(default_factory=list)
    types: List[Type] = field(default_factory=list)
    repository: Optional[Repo] = None


@dataclass
class File:
    """A unit of rendered output: header, packages, footer."""
    header: str = ""
    footer: str = ""
    packages: List[Package] = field(default_factory=list)
