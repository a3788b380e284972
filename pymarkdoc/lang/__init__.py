"""Loading of Python source into documentation models."""

from .doc import parse_doc, synopsis
from .loader import load_package
from .models import BlockKind, DocBlock, File, Func, Location, Package, Repo, Type, Value
from .repository import detect_repository

__all__ = [
    'BlockKind',
    'DocBlock',
    'File',
    'Func',
    'Location',
    'Package',
    'Repo',
    'Type',
    'Value',
    'detect_repository',
    'load_package',
    'parse_doc',
    'synopsis',
]
