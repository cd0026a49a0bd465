"""
mockhttp In-Memory Source

Definitions supplied directly by the caller, mostly for tests.
"""

from typing import Any, Dict, Iterable, List, Union

from ..mock.models import Definition
from .base import build_definitions


class InMemoryDefinitionSource:
    """
    Source backed by a list of records or Definition objects.

    Example:
        source = InMemoryDefinitionSource([
            {'host': 'api.example.com', 'path': '/ping', 'method': 'GET',
             'responses': [{'status_code': 200, 'response_body': 'pong'}]}
        ])
    """

    def __init__(self, records: Iterable[Union[Dict[str, Any], Definition]], case_sensitive: bool = True):
        self.records = list(records)
        self.case_sensitive = case_sensitive

    def load(self) -> List[Definition]:
        definitions = []
        for position, record in enumerate(self.records):
            if isinstance(record, Definition):
                definitions.append(record)
            else:
                definitions.extend(
                    build_definitions([record], f"memory[{position}]", case_sensitive=self.case_sensitive)
                )
        return definitions
