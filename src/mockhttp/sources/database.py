"""
mockhttp SQLite Source

Loads definitions stored as rows of a SQLite table. Responses are kept as a
JSON array in a single column.
"""

import json
import re
import sqlite3
from contextlib import closing
from typing import Any, Dict, List

from ..errors import ConfigurationError, DefinitionError
from ..mock.models import Definition
from .base import build_definitions

_TABLE_NAME_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


class SQLiteDefinitionSource:
    """
    Source backed by a SQLite table.

    Schema:
        id INTEGER PRIMARY KEY, host TEXT, path TEXT, method TEXT,
        description TEXT, responses TEXT (JSON array of response records)

    Rows load in id order.

    Example:
        source = SQLiteDefinitionSource('mocks.db')
        source.initialize()
        source.add({'host': 'api.example.com', 'path': '/ping', 'method': 'GET',
                    'responses': [{'response_body': 'pong'}]})
        definitions = source.load()
    """

    def __init__(self, database: str, table: str = 'mock_definitions', case_sensitive: bool = True):
        """
        Initialize SQLite source.

        Args:
            database: Path to the SQLite database file
            table: Table holding the definitions
            case_sensitive: Compile path templates case-sensitively
        """
        if not _TABLE_NAME_RE.match(table):
            raise ConfigurationError(f"Invalid table name: {table!r}")

        self.database = database
        self.table = table
        self.case_sensitive = case_sensitive

    def _connect(self) -> sqlite3.Connection:
        try:
            return sqlite3.connect(self.database)
        except sqlite3.Error as e:
            raise ConfigurationError(f"Unable to open definition database {self.database}: {e}") from e

    def initialize(self):
        """Create the definitions table if it does not exist."""
        with closing(self._connect()) as conn, conn:
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {self.table} ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "host TEXT NOT NULL, "
                "path TEXT NOT NULL, "
                "method TEXT NOT NULL, "
                "description TEXT NOT NULL DEFAULT '', "
                "responses TEXT NOT NULL DEFAULT '[]')"
            )

    def add(self, record: Dict[str, Any]) -> int:
        """
        Insert one definition record.

        Args:
            record: Definition record (validated before insert)

        Returns:
            Row id of the new definition
        """
        Definition.from_dict(record, case_sensitive=self.case_sensitive)

        with closing(self._connect()) as conn, conn:
            cursor = conn.execute(
                f"INSERT INTO {self.table} (host, path, method, description, responses) VALUES (?, ?, ?, ?, ?)",
                (
                    record['host'],
                    record['path'],
                    str(record['method']).upper(),
                    record.get('desc') or '',
                    json.dumps(record.get('responses') or []),
                ),
            )
            return cursor.lastrowid

    def load(self) -> List[Definition]:
        """
        Load all definitions.

        Raises:
            ConfigurationError: If the table cannot be read
            DefinitionError: If a row holds an invalid record
        """
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    f"SELECT id, host, path, method, description, responses FROM {self.table} ORDER BY id"
                ).fetchall()
        except sqlite3.Error as e:
            raise ConfigurationError(f"Unable to read definitions from {self.table}: {e}") from e

        records = []
        for row_id, host, path, method, desc, responses in rows:
            try:
                decoded = json.loads(responses) if responses else []
            except json.JSONDecodeError as e:
                raise DefinitionError(f"{self.table} row {row_id}: invalid responses JSON: {e}") from e
            records.append({
                'host': host,
                'path': path,
                'method': method,
                'desc': desc,
                'responses': decoded,
            })

        return build_definitions(records, self.table, case_sensitive=self.case_sensitive)
