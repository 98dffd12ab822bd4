"""
Pytest configuration and fixtures for duckview tests.
"""
import os

import pytest
import duckdb

# Run Qt headless when no display is available
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from duckview.core.query_builder import quote_literal

# Qt Application fixture for tests that need Qt objects
_qt_app = None

PRODUCTS_SQL = [
    """CREATE TABLE test_data AS SELECT
       1 as id, 'Product A' as name, 'Electronics' as category, 19.99 as price""",
    """INSERT INTO test_data VALUES
       (2, 'Product B', 'Clothing', 29.99),
       (3, 'Product C', 'Food', 9.99),
       (4, 'Product D', 'Books', 14.99),
       (5, 'Product E', 'Electronics', 99.99)""",
]


def write_with_duckdb(path, statements, options=""):
    """Run statements in a scratch session and COPY test_data to path."""
    conn = duckdb.connect()
    try:
        for sql in statements:
            conn.execute(sql)
        conn.execute(f"COPY test_data TO {quote_literal(str(path))} {options}".rstrip())
    finally:
        conn.close()
    return path


@pytest.fixture(scope="session")
def qapp():
    """Create a QApplication for tests that need Qt objects."""
    global _qt_app
    from PySide6.QtWidgets import QApplication
    if _qt_app is None:
        _qt_app = QApplication.instance() or QApplication([])
    yield _qt_app


@pytest.fixture
def products_parquet(tmp_path):
    """5-row products file (id, name, category, price) in Parquet format."""
    return str(write_with_duckdb(tmp_path / "test_data.parquet", PRODUCTS_SQL, "(FORMAT PARQUET)"))


@pytest.fixture
def products_csv(tmp_path):
    """Same 5 products written as CSV with a header line."""
    return str(write_with_duckdb(tmp_path / "test_data.csv", PRODUCTS_SQL, "(FORMAT CSV, HEADER)"))


@pytest.fixture
def typed_parquet(tmp_path):
    """One-row Parquet file covering temporal, binary and nested columns."""
    statements = ["""CREATE TABLE test_data AS SELECT
        true AS flag,
        DATE '2022-10-10' AS day,
        TIMESTAMP '2021-03-03 09:44:21' AS moment,
        TIME '01:01:01' AS clock,
        'abc'::BLOB AS payload,
        [1, 2, 3] AS numbers,
        {'a': 1, 'b': 'x'} AS record,
        NULL::INTEGER AS missing"""]
    return str(write_with_duckdb(tmp_path / "typed.parquet", statements, "(FORMAT PARQUET)"))


@pytest.fixture
def write_products(tmp_path):
    """Factory writing the products table to a file name of the test's choosing."""
    def _write(name, options=""):
        return str(write_with_duckdb(tmp_path / name, PRODUCTS_SQL, options))
    return _write


@pytest.fixture
def small_decimals_parquet(tmp_path):
    """One-row Parquet file with decimals below 1e-6."""
    statements = ["""CREATE TABLE test_data AS SELECT
        0.0000001::DECIMAL(18,7) AS small_dec,
        0::DECIMAL(18,10) AS zero_dec"""]
    return str(write_with_duckdb(tmp_path / "decimals.parquet", statements, "(FORMAT PARQUET)"))
