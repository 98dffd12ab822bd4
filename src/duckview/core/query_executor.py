"""
Query Executor - Runs the statements of a fetch in an in-memory DuckDB session.

Order of work for one fetch:
1. schema statement (LIMIT 1): column names and Arrow types
2. data statement: executed and drained; this is the only timed part
3. count statement: total rows in the file

A statement is "prepared" by binding it into a lazy DuckDB relation; errors
raised there are PrepareError, errors raised while the relation runs or its
rows are read are ExecutionError. Both name the statement and the file.
Nothing is retried.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import duckdb
import pyarrow as pa

from ..constants import IN_MEMORY_DATABASE
from .arrow_values import engine_type_name, table_columns
from .errors import (
    EngineConnectionError,
    ExecutionError,
    PrepareError,
    RowCountUnavailable,
)
from .models import ColumnDescriptor, Row
from .query_builder import Statement
from .value_formatter import format_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageData:
    """Formatted rows of the data statement and the time it took."""
    rows: Tuple[Row, ...]
    duration: float


class QueryExecutor:
    """
    Executes the statements of one fetch.

    Usage:
        executor = QueryExecutor("data.parquet")
        with executor.open_session() as conn:
            columns = executor.fetch_schema(conn, plan.schema)
            page = executor.fetch_rows(conn, plan.data, len(columns))
            total = executor.fetch_count(conn, plan.count)
    """

    def __init__(self, file_path: str, database: str = IN_MEMORY_DATABASE):
        """
        Args:
            file_path: File the statements read (used in error messages)
            database: DuckDB database to open (in-memory by default)
        """
        self.file_path = file_path
        self.database = database

    @contextmanager
    def open_session(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """
        Open an engine session that is closed on every exit path.

        Raises:
            EngineConnectionError: if the session cannot be opened
        """
        try:
            conn = duckdb.connect(self.database)
        except duckdb.Error as e:
            raise EngineConnectionError(
                f"Failed to set up duckdb connection: {e}", self.file_path
            ) from e

        try:
            yield conn
        finally:
            conn.close()

    # ==================== Statement helpers ====================

    def _prepare(self, conn: duckdb.DuckDBPyConnection,
                 statement: Statement) -> duckdb.DuckDBPyRelation:
        logger.debug(f"Preparing {statement.kind.value} query: {statement.sql}")
        try:
            return conn.sql(statement.sql)
        except duckdb.Error as e:
            raise PrepareError(statement.kind, self.file_path, str(e), statement.sql) from e

    def _execute(self, relation: duckdb.DuckDBPyRelation,
                 statement: Statement) -> pa.Table:
        try:
            return relation.fetch_arrow_table()
        except duckdb.Error as e:
            raise ExecutionError(statement.kind, self.file_path, str(e), statement.sql) from e

    # ==================== The three statements ====================

    def fetch_schema(self, conn: duckdb.DuckDBPyConnection,
                     statement: Statement) -> List[ColumnDescriptor]:
        """Run the schema sample statement and describe its columns."""
        relation = self._prepare(conn, statement)
        schema = self._execute(relation, statement).schema
        return [
            ColumnDescriptor(field.name, engine_type_name(field.type))
            for field in schema
        ]

    def fetch_rows(self, conn: duckdb.DuckDBPyConnection, statement: Statement,
                   column_count: int) -> PageData:
        """
        Run the data statement and format every cell.

        Args:
            conn: Open session
            statement: Page data statement
            column_count: Number of columns reported by the schema statement

        Raises:
            PrepareError, ExecutionError
        """
        relation = self._prepare(conn, statement)

        start = time.perf_counter()
        table = self._execute(relation, statement)
        if table.num_columns != column_count:
            raise ExecutionError(
                statement.kind,
                self.file_path,
                f"expected {column_count} columns, got {table.num_columns}",
                statement.sql,
            )
        columns = table_columns(table)
        rows = tuple(
            tuple(format_value(column[index]) for column in columns)
            for index in range(table.num_rows)
        )
        duration = time.perf_counter() - start

        logger.debug(f"Read {len(rows)} rows from '{self.file_path}' in {duration:.6f}s")
        return PageData(rows=rows, duration=duration)

    def fetch_count(self, conn: duckdb.DuckDBPyConnection, statement: Statement) -> int:
        """
        Run the count statement.

        Raises:
            RowCountUnavailable: if the statement returned no row
        """
        relation = self._prepare(conn, statement)
        try:
            row = relation.fetchone()
        except duckdb.Error as e:
            raise ExecutionError(statement.kind, self.file_path, str(e), statement.sql) from e

        if row is None or row[0] is None:
            raise RowCountUnavailable("Row count query returned no row", self.file_path)
        return int(row[0])

