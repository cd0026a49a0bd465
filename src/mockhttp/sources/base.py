"""
mockhttp Definition Sources

Capability interface for loading definitions from a storage medium, plus the
shared record -> Definition conversion.
"""

from typing import Any, Dict, Iterable, List, Protocol

from ..errors import DefinitionError
from ..mock.models import Definition


class DefinitionSource(Protocol):
    """Anything that can produce compiled definitions."""

    def load(self) -> List[Definition]:
        ...


def extract_records(data: Any, origin: str) -> List[Dict[str, Any]]:
    """
    Normalize the supported document layouts into a list of records.

    Layouts:
    - {"host": ..., "path": ...}         (single definition)
    - [{...}, {...}]                     (list of definitions)
    - {"definitions": [{...}, {...}]}    (wrapped list)

    Args:
        data: Decoded document
        origin: Where the document came from (for error messages)

    Returns:
        List of raw definition records

    Raises:
        DefinitionError: If the layout is not recognized
    """
    if data is None:
        return []
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        if 'definitions' in data:
            records = data['definitions'] or []
            if not isinstance(records, list):
                raise DefinitionError(f"'definitions' must be a list in {origin}")
            return records
        return [data]
    raise DefinitionError(
        f"Unexpected document format in {origin}. "
        f"Expected a mapping or a list, got {type(data).__name__}"
    )


def build_definitions(records: Iterable[Any], origin: str, case_sensitive: bool = True) -> List[Definition]:
    """Compile raw records, prefixing errors with their origin."""
    definitions = []
    for position, record in enumerate(records):
        try:
            definitions.append(Definition.from_dict(record, case_sensitive=case_sensitive))
        except DefinitionError as e:
            raise type(e)(f"{origin} [definition {position}]: {e}") from e
    return definitions
