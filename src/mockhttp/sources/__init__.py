"""
mockhttp Definition Sources

Storage backends producing compiled definitions:
- FileDefinitionSource: directory of YAML/JSON files
- SQLiteDefinitionSource: SQLite table
- InMemoryDefinitionSource: records supplied in code
"""

from .base import DefinitionSource, build_definitions, extract_records
from .file import FileDefinitionSource
from .database import SQLiteDefinitionSource
from .memory import InMemoryDefinitionSource

__all__ = [
    'DefinitionSource',
    'build_definitions',
    'extract_records',
    'FileDefinitionSource',
    'SQLiteDefinitionSource',
    'InMemoryDefinitionSource',
]
