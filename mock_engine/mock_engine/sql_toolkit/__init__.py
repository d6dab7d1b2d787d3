"""Parser-neutral SQL access for the mocking engine.

Example::

    from mock_engine.sql_toolkit import get_sql_toolkit, Dialect

    tk = get_sql_toolkit()
    insert = tk.parser.parse_insert("INSERT INTO sales SELECT * FROM raw", Dialect.JAVA_LEX)
    ddl = tk.ddl_parser.parse_statement("CREATE TABLE sales (id INT) WITH ('connector'='kafka')")
    sql = tk.renderer.render_insert(insert, Dialect.JAVA_LEX)

Out of the box the toolkit is backed by sqlglot; tests and embedders may
register another factory with ``register_implementation()``.
"""

from ._factory import get_sql_toolkit, register_implementation, reset_toolkit
from ._protocols import (
    DdlParser,
    SqlParser,
    SqlRenderer,
    SqlRewriter,
    SqlToolkit,
)
from ._types import (
    DdlStatement,
    Dialect,
    InsertStatement,
    SqlNodeKind,
    SqlParseError,
    SqlToolkitError,
    TableRef,
    UnexpectedStatementError,
)

__all__ = [
    "DdlParser",
    "DdlStatement",
    "Dialect",
    "InsertStatement",
    "SqlNodeKind",
    "SqlParseError",
    "SqlParser",
    "SqlRenderer",
    "SqlRewriter",
    "SqlToolkit",
    "SqlToolkitError",
    "TableRef",
    "UnexpectedStatementError",
    "get_sql_toolkit",
    "register_implementation",
    "reset_toolkit",
]
