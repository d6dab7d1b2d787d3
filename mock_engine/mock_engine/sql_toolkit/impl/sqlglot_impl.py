"""sqlglot adapter for :mod:`mock_engine.sql_toolkit`.

No other module imports ``sqlglot``; the mocking code only sees the views
from :mod:`mock_engine.sql_toolkit._types`.

Job scripts are read with :class:`JavaLex`, a Spark-derived dialect whose
identifiers are case-sensitive and back-tick quoted.  Streaming jobs use a
lot of syntax no sqlglot grammar models (watermarks, ``ROW<...>`` types,
metadata columns, windowing table functions, temporal joins), yet the
mocking engine only ever needs two things from a statement: the table an
``INSERT`` writes to and the column list of a ``CREATE TABLE``.  Both are
read from the token stream.  The full parser is consulted only to classify
the statements that are neither.

A rewritten ``INSERT`` is the original text with the target name spliced
out and the new one spliced in, so the source query is never re-generated.
"""

from __future__ import annotations

import dataclasses
import logging
import re

from sqlglot import exp
from sqlglot.dialects.dialect import Dialect as SqlglotDialect
from sqlglot.dialects.dialect import NormalizationStrategy
from sqlglot.dialects.spark import Spark
from sqlglot.errors import SqlglotError
from sqlglot.tokens import Token, TokenType

from .._types import (
    DdlStatement,
    Dialect,
    InsertStatement,
    SqlNodeKind,
    SqlParseError,
    TableRef,
    UnexpectedStatementError,
)

logger = logging.getLogger(__name__)


class JavaLex(Spark):
    """Spark grammar with case-sensitive identifiers.

    Back-tick quoting and as-written unquoted identifiers are inherited.
    """

    NORMALIZATION_STRATEGY = NormalizationStrategy.CASE_SENSITIVE


# Dialect objects are immutable; one instance is shared by all callers.
_DIALECTS: dict[Dialect, SqlglotDialect] = {
    Dialect.JAVA_LEX: JavaLex(),
}

# ---------------------------------------------------------------------------
# Internal: SQLGlot expression → SqlNodeKind mapping
# ---------------------------------------------------------------------------

_EXP_KIND_MAP: dict[str, SqlNodeKind] = {
    "Select": SqlNodeKind.SELECT,
    "Union": SqlNodeKind.SELECT,
    "Create": SqlNodeKind.CREATE,
    "Insert": SqlNodeKind.INSERT,
    "Delete": SqlNodeKind.DELETE,
    "Drop": SqlNodeKind.DROP,
    "Alter": SqlNodeKind.ALTER,
    "Set": SqlNodeKind.SET,
    "Use": SqlNodeKind.USE,
    "Command": SqlNodeKind.COMMAND,
    "With": SqlNodeKind.WITH,
}

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_$]*\Z")

# Tokens that may follow the target of an INSERT header.
_INSERT_BODY_WORDS = frozenset({"SELECT", "WITH", "VALUES", "PARTITION", "TABLE"})


def _dialect_value(dialect: Dialect) -> SqlglotDialect:
    """Return the sqlglot dialect object for a :class:`Dialect` enum member."""
    return _DIALECTS[dialect]


def _classify_node(node: exp.Expression) -> SqlNodeKind:
    return _EXP_KIND_MAP.get(type(node).__name__, SqlNodeKind.UNKNOWN)


def _table_ref(table: exp.Table) -> TableRef:
    """View of a sqlglot ``Table``; missing parts become ``None``."""
    return TableRef(
        catalog=table.catalog or None,
        schema=table.db or None,
        name=table.name or "",
    )


# ---------------------------------------------------------------------------
# Internal: token stream helpers
# ---------------------------------------------------------------------------


def _tokenize(sql: str, dialect: Dialect) -> list[Token]:
    """Tokenize *sql* and check that it is one statement with balanced parentheses.

    Raises :class:`SqlParseError` for empty text, tokenizer errors (an
    unterminated string, say), stray ``;`` separators and unbalanced
    parentheses.
    """
    if not sql or not sql.strip():
        raise SqlParseError("Failed to parse SQL: empty statement")

    try:
        tokens: list[Token] = _dialect_value(dialect).tokenize(sql)
    except SqlglotError as exc:
        logger.debug("SQLGlot could not tokenize statement: %s", exc)
        raise SqlParseError(f"Failed to parse SQL: {exc}") from exc

    if not tokens or tokens[0].token_type == TokenType.SEMICOLON:
        raise SqlParseError("Failed to parse SQL: empty statement")

    depth = 0
    for index, token in enumerate(tokens):
        if token.token_type == TokenType.SEMICOLON and index != len(tokens) - 1:
            raise SqlParseError("Failed to parse SQL: expected exactly 1 statement")
        if token.token_type == TokenType.L_PAREN:
            depth += 1
        elif token.token_type == TokenType.R_PAREN:
            depth -= 1
            if depth < 0:
                raise SqlParseError(f"Failed to parse SQL: unbalanced ')' at offset {token.start}")
    if depth:
        raise SqlParseError("Failed to parse SQL: unclosed '('")
    return tokens


def _match_words(tokens: list[Token], index: int, *words: str) -> int | None:
    """Index just past *words* if the tokens at *index* spell them, else ``None``.

    The tokenizer folds some phrases (``PRIMARY KEY``, ``GROUP BY``) into a
    single token, so the match is made word by word rather than per token.
    """
    pending = list(words)
    while pending:
        if index >= len(tokens):
            return None
        token = tokens[index]
        if token.token_type in (TokenType.IDENTIFIER, TokenType.STRING):
            return None
        spelled = token.text.upper().split()
        if spelled != pending[: len(spelled)]:
            return None
        del pending[: len(spelled)]
        index += 1
    return index


def _is_name(token: Token) -> bool:
    if token.token_type == TokenType.IDENTIFIER:
        return True
    return token.token_type != TokenType.STRING and bool(_NAME_RE.match(token.text))


def _read_table_name(tokens: list[Token], index: int) -> tuple[TableRef, int] | None:
    """Read ``[catalog.][database.]name`` at *index*.

    Returns the name and the index of the first token after it, or ``None``
    when no name of one to three parts starts there.
    """
    if index >= len(tokens) or not _is_name(tokens[index]):
        return None

    parts = [tokens[index].text]
    index += 1
    while (
        index + 1 < len(tokens)
        and tokens[index].token_type == TokenType.DOT
        and _is_name(tokens[index + 1])
    ):
        parts.append(tokens[index + 1].text)
        index += 2

    if len(parts) > 3:
        return None
    catalog, schema, name = [None] * (3 - len(parts)) + parts
    return TableRef(catalog=catalog, schema=schema, name=name), index


def _closing_paren(tokens: list[Token], open_index: int) -> int:
    depth = 0
    for index in range(open_index, len(tokens)):
        if tokens[index].token_type == TokenType.L_PAREN:
            depth += 1
        elif tokens[index].token_type == TokenType.R_PAREN:
            depth -= 1
            if depth == 0:
                return index
    # _tokenize has already rejected unbalanced text.
    raise SqlParseError("Failed to parse SQL: unclosed '('")


def _column_names(tokens: list[Token], open_index: int) -> tuple[str, ...]:
    """Names in a ``(a, b, c)`` list at *open_index*; ``()`` for anything else."""
    inner = tokens[open_index + 1 : _closing_paren(tokens, open_index)]
    names = inner[::2]
    separators = inner[1::2]
    if not names or any(_match_words(inner, i, "SELECT") is not None for i in range(0, len(inner), 2)):
        return ()
    if not all(_is_name(t) for t in names) or any(t.token_type != TokenType.COMMA for t in separators):
        return ()
    return tuple(t.text for t in names)


def _insert_header(tokens: list[Token], sql: str, dialect: Dialect) -> InsertStatement | None:
    """Read ``INSERT {INTO | OVERWRITE} [TABLE] <name> [(<columns>)]``.

    ``None`` when the statement does not open with such a header.
    """
    index = _match_words(tokens, 0, "INSERT")
    if index is None:
        return None
    while index < len(tokens) and tokens[index].token_type == TokenType.HINT:
        index += 1

    overwrite = False
    after_verb = _match_words(tokens, index, "INTO")
    if after_verb is None:
        after_verb = _match_words(tokens, index, "OVERWRITE")
        overwrite = after_verb is not None
    if after_verb is None:
        return None

    index = after_verb
    after_table = _match_words(tokens, index, "TABLE")
    if after_table is not None and after_table < len(tokens) and _is_name(tokens[after_table]):
        index = after_table

    name = _read_table_name(tokens, index)
    if name is None:
        return None
    target, end = name
    if end >= len(tokens):
        return None

    follower = tokens[end]
    if follower.token_type not in (TokenType.L_PAREN, TokenType.HINT) and not any(
        _match_words(tokens, end, word) is not None for word in _INSERT_BODY_WORDS
    ):
        # INSERT OVERWRITE [LOCAL] DIRECTORY '...' and friends.
        return None

    return InsertStatement(
        target=target,
        sql=sql,
        target_span=(tokens[index].start, tokens[end - 1].end + 1),
        target_columns=_column_names(tokens, end) if follower.token_type == TokenType.L_PAREN else (),
        overwrite=overwrite,
        dialect=dialect,
    )


def _create_table_header(tokens: list[Token]) -> tuple[TableRef, int] | None:
    """Read ``CREATE [OR REPLACE] [TEMPORARY] TABLE [IF NOT EXISTS] <name> (``.

    Returns the table and the index of the opening parenthesis of its column
    list, or ``None`` when the statement does not open with such a header.
    """
    index = _match_words(tokens, 0, "CREATE")
    if index is None:
        return None
    for optional in (("OR", "REPLACE"), ("TEMPORARY",)):
        after = _match_words(tokens, index, *optional)
        if after is not None:
            index = after

    index = _match_words(tokens, index, "TABLE")
    if index is None:
        return None
    after = _match_words(tokens, index, "IF", "NOT", "EXISTS")
    if after is not None:
        index = after

    name = _read_table_name(tokens, index)
    if name is None:
        return None
    table, end = name
    if end >= len(tokens) or tokens[end].token_type != TokenType.L_PAREN:
        return None
    return table, end


def _parse_single(sql: str, dialect: Dialect) -> exp.Expression:
    """Parse *sql*, already checked by :func:`_tokenize`, as one statement."""
    try:
        statements = _dialect_value(dialect).parse(sql)
    except SqlglotError as exc:
        logger.debug("SQLGlot rejected statement: %s", exc)
        raise SqlParseError(f"Failed to parse SQL: {exc}") from exc

    statements = [s for s in statements if s is not None]
    if len(statements) != 1:
        raise SqlParseError(
            f"Failed to parse SQL: expected exactly 1 statement, got {len(statements)}"
        )
    return statements[0]


# ---------------------------------------------------------------------------
# SqlGlotParser
# ---------------------------------------------------------------------------


class SqlGlotParser:
    """:class:`SqlParser` over the :class:`JavaLex` grammar."""

    def parse_insert(
        self,
        sql: str,
        dialect: Dialect = Dialect.JAVA_LEX,
    ) -> InsertStatement:
        """Parse exactly one ``INSERT`` statement.

        The header is read from the tokens, so the source query is free to
        use windowing table functions and other syntax outside the grammar.
        """
        tokens = _tokenize(sql, dialect)
        insert = _insert_header(tokens, sql, dialect)
        if insert is not None:
            return insert

        ast = _parse_single(sql, dialect)
        if isinstance(ast, exp.Insert):
            raise UnexpectedStatementError(
                SqlNodeKind.INSERT, SqlNodeKind.INSERT, detail="INSERT does not write to a named table"
            )
        raise UnexpectedStatementError(SqlNodeKind.INSERT, _classify_node(ast))


# ---------------------------------------------------------------------------
# SqlGlotDdlParser
# ---------------------------------------------------------------------------


class SqlGlotDdlParser:
    """:class:`DdlParser` reading ``CREATE`` and ``DROP`` statements."""

    def parse_statement(
        self,
        sql: str,
        dialect: Dialect = Dialect.JAVA_LEX,
    ) -> DdlStatement:
        """Parse one DDL statement into a :class:`DdlStatement` view.

        A ``CREATE TABLE`` with a column list is recognised from its header
        and the column text is cut out between the matching parentheses, so
        watermarks, constraints, computed and metadata columns pass through
        untouched.  Everything else goes to the full parser for its kind.
        """
        tokens = _tokenize(sql, dialect)
        header = _create_table_header(tokens)
        if header is not None:
            table, open_index = header
            close_index = _closing_paren(tokens, open_index)
            columns_sql = sql[tokens[open_index].end + 1 : tokens[close_index].start].strip()
            return DdlStatement(
                kind=SqlNodeKind.CREATE,
                object_kind="TABLE",
                table=table,
                columns_sql=columns_sql,
                sql=sql,
            )

        ast = _parse_single(sql, dialect)
        kind = _classify_node(ast)
        if not isinstance(ast, (exp.Create, exp.Drop)):
            return DdlStatement(kind=kind, sql=sql)

        object_kind = str(ast.args.get("kind") or "").upper()
        target = ast.this
        table_node = target.this if isinstance(target, exp.Schema) else target
        table = _table_ref(table_node) if isinstance(table_node, exp.Table) else None
        return DdlStatement(kind=kind, object_kind=object_kind, table=table, sql=sql)


# ---------------------------------------------------------------------------
# SqlGlotRenderer
# ---------------------------------------------------------------------------


class SqlGlotRenderer:
    """:class:`SqlRenderer` that re-renders only the target table name."""

    def render_insert(
        self,
        insert: InsertStatement,
        dialect: Dialect = Dialect.JAVA_LEX,
    ) -> str:
        """Splice the target, quoted as *dialect* requires, into the statement text."""
        start, end = insert.target_span
        table = exp.table_(insert.target.name, db=insert.target.schema, catalog=insert.target.catalog)
        return f"{insert.sql[:start]}{table.sql(dialect=_dialect_value(dialect))}{insert.sql[end:]}"


# ---------------------------------------------------------------------------
# SqlGlotRewriter
# ---------------------------------------------------------------------------


class SqlGlotRewriter:
    """:class:`SqlRewriter` over :class:`InsertStatement` views."""

    def retarget_insert(
        self,
        insert: InsertStatement,
        target: TableRef,
    ) -> InsertStatement:
        """Return a copy of *insert* writing to *target*.

        Views are frozen, so the caller's statement keeps its original
        target.  Partition specs, column lists, hints and the source query
        are part of the text around the target span and ride along.
        """
        return dataclasses.replace(insert, target=target)


# ---------------------------------------------------------------------------
# Composite Toolkit
# ---------------------------------------------------------------------------


class SqlGlotToolkit:
    """The toolkit :func:`get_sql_toolkit` builds when nothing else is registered."""

    def __init__(self) -> None:
        self._parser = SqlGlotParser()
        self._ddl_parser = SqlGlotDdlParser()
        self._renderer = SqlGlotRenderer()
        self._rewriter = SqlGlotRewriter()

    @property
    def parser(self) -> SqlGlotParser:
        return self._parser

    @property
    def ddl_parser(self) -> SqlGlotDdlParser:
        return self._ddl_parser

    @property
    def renderer(self) -> SqlGlotRenderer:
        return self._renderer

    @property
    def rewriter(self) -> SqlGlotRewriter:
        return self._rewriter
