"""Tests for the dialect statement builders."""

import pytest

from sqlscript.core.splitter import ScriptSplitter
from sqlscript.core.statement import Delimiter, SQLStatement
from sqlscript.dialects import (
    MySQLStatementBuilder,
    OracleStatementBuilder,
    PostgresStatementBuilder,
    SQLiteStatementBuilder,
    SQLStatementBuilder,
    TSQLStatementBuilder,
    get_builder_factory,
)
from sqlscript.protocols import StatementBuilderProtocol


def split(script: str, dialect: "str | None" = None, strip_delimiter: bool = False) -> "list[SQLStatement]":
    factory = get_builder_factory(dialect, strip_delimiter=strip_delimiter)
    return ScriptSplitter(factory).split(script.split("\n"))


@pytest.mark.parametrize(
    "builder_class",
    [
        SQLStatementBuilder,
        MySQLStatementBuilder,
        OracleStatementBuilder,
        PostgresStatementBuilder,
        SQLiteStatementBuilder,
        TSQLStatementBuilder,
    ],
)
def test_builders_satisfy_protocol(builder_class: "type[SQLStatementBuilder]") -> None:
    builder = builder_class()

    assert isinstance(builder, StatementBuilderProtocol)
    assert builder.is_empty
    assert not builder.is_terminated


class TestGenericBuilder:
    """Test the generic SQL rules."""

    def test_comment_recognition(self) -> None:
        builder = SQLStatementBuilder()

        assert builder.is_single_line_comment("-- note")
        assert not builder.is_single_line_comment("# note")
        assert builder.starts_multiline_comment("/* note")
        assert builder.ends_multiline_comment("note */")
        assert not builder.is_comment_directive("/*!40101 SET NAMES utf8 */")
        assert builder.extract_new_delimiter("DELIMITER $$") is None

    def test_quoted_identifier_hides_delimiter(self) -> None:
        statements = split('SELECT 1 AS "a;\nb";\nSELECT 2;')

        assert [s.line_number for s in statements] == [1, 3]

    def test_escaped_quote(self) -> None:
        """Test doubled quotes keep the literal open correctly."""
        statements = split("INSERT INTO t VALUES ('it''s;\nfine');\nSELECT 2;")

        assert [s.line_number for s in statements] == [1, 3]

    def test_block_comment_inside_statement_hides_delimiter(self) -> None:
        statements = split("SELECT 1 /* not the end;\nstill comment; */\n;\nSELECT 2;")

        assert statements == [
            SQLStatement(1, "SELECT 1 /* not the end;\nstill comment; */\n;"),
            SQLStatement(4, "SELECT 2;"),
        ]

    def test_strip_delimiter(self) -> None:
        statements = split("SELECT 1;\nSELECT 2 ;  \nSELECT 3", strip_delimiter=True)

        assert [s.sql for s in statements] == ["SELECT 1", "SELECT 2", "SELECT 3"]

    @pytest.mark.parametrize(
        ("script", "expected"),
        [
            ("SELECT 1; -- first\nSELECT 2;", ["SELECT 1 -- first", "SELECT 2"]),
            ("SELECT 1; /* first */\nSELECT 2;", ["SELECT 1 /* first */", "SELECT 2"]),
            ("SELECT 1\n; -- done", ["SELECT 1\n -- done"]),
            ("SELECT ';' ;", ["SELECT ';'"]),
        ],
    )
    def test_strip_delimiter_before_trailing_comment(self, script: str, expected: "list[str]") -> None:
        """Test the delimiter is removed where it was found, not only at the end of the text."""
        statements = split(script, strip_delimiter=True)

        assert [s.sql for s in statements] == expected

    def test_explicit_delimiter(self) -> None:
        builder = SQLStatementBuilder()
        builder.set_delimiter(Delimiter("$$"))
        builder.add_line("SELECT 1;")

        assert not builder.is_terminated
        builder.add_line("$$")
        assert builder.is_terminated
        assert builder.delimiter == Delimiter("$$")


class TestMySQLBuilder:
    """Test MySQL specific rules."""

    def test_hash_comments(self) -> None:
        statements = split("# header\nSELECT 1; # trailing\n-- other\nSELECT 2;", "mysql")

        assert statements == [SQLStatement(2, "SELECT 1; # trailing"), SQLStatement(4, "SELECT 2;")]

    def test_versioned_comment_is_statement(self) -> None:
        statements = split("/*!40101 SET NAMES utf8 */;\nSELECT 1;", "mysql")

        assert statements == [SQLStatement(1, "/*!40101 SET NAMES utf8 */;"), SQLStatement(2, "SELECT 1;")]

    def test_backslash_escaped_quote(self) -> None:
        statements = split("INSERT INTO t VALUES ('it\\'s;\nok');\nSELECT 2;", "mysql")

        assert [s.line_number for s in statements] == [1, 3]

    def test_backtick_identifier(self) -> None:
        statements = split("SELECT `odd;name` FROM t;\nSELECT 2;", "mysql")

        assert len(statements) == 2

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("DELIMITER $$", Delimiter("$$")),
            ("  delimiter //  ", Delimiter("//")),
            ("DELIMITER ;", Delimiter(";")),
            ("DELIMITERS $$", None),
            ("SELECT 1;", None),
        ],
    )
    def test_extract_new_delimiter(self, line: str, expected: "Delimiter | None") -> None:
        assert MySQLStatementBuilder().extract_new_delimiter(line) == expected

    def test_stored_procedure_with_delimiter(self) -> None:
        script = "\n".join([
            "DELIMITER //",
            "CREATE TRIGGER trg BEFORE INSERT ON t",
            "FOR EACH ROW BEGIN",
            "  SET NEW.created = NOW();",
            "END //",
            "DELIMITER ;",
            "INSERT INTO t (id) VALUES (1);",
        ])

        statements = split(script, "mysql", strip_delimiter=True)

        assert statements == [
            SQLStatement(
                2, "CREATE TRIGGER trg BEFORE INSERT ON t\nFOR EACH ROW BEGIN\n  SET NEW.created = NOW();\nEND"
            ),
            SQLStatement(7, "INSERT INTO t (id) VALUES (1)"),
        ]


class TestPostgresBuilder:
    """Test PostgreSQL specific rules."""

    def test_dollar_quoted_function_body(self) -> None:
        script = "\n".join([
            "CREATE FUNCTION f() RETURNS int AS $$",
            "BEGIN",
            "  RETURN 1;",
            "END;",
            "$$ LANGUAGE plpgsql;",
            "SELECT f();",
        ])

        statements = split(script, "postgres")

        assert [s.line_number for s in statements] == [1, 6]
        assert statements[0].sql.endswith("$$ LANGUAGE plpgsql;")

    def test_tagged_dollar_quote(self) -> None:
        script = "DO $body$\nBEGIN\n  PERFORM 1; -- $$ is not the tag\nEND;\n$body$;\nSELECT 1;"

        statements = split(script, "postgresql")

        assert [s.line_number for s in statements] == [1, 6]

    def test_positional_parameter_is_not_a_quote(self) -> None:
        statements = split("PREPARE q AS SELECT $1;\nSELECT 2;", "postgres")

        assert len(statements) == 2

    def test_copy_from_stdin(self) -> None:
        script = "COPY users (id, name) FROM stdin;\n1\tit's\n2\tbob;\n\\.\nSELECT 1;"

        statements = split(script, "postgres")

        assert statements == [
            SQLStatement(1, "COPY users (id, name) FROM stdin;\n1\tit's\n2\tbob;\n\\."),
            SQLStatement(5, "SELECT 1;"),
        ]

    def test_copy_from_stdin_strip_delimiter(self) -> None:
        statements = split("COPY users FROM STDIN;\n1\n\\.", "postgres", strip_delimiter=True)

        assert statements == [SQLStatement(1, "COPY users FROM STDIN;\n1")]


class TestOracleBuilder:
    """Test Oracle specific rules."""

    def test_plsql_block_ends_with_slash(self) -> None:
        script = "\n".join([
            "CREATE OR REPLACE PROCEDURE p AS",
            "BEGIN",
            "  NULL;",
            "END;",
            "/",
            "SELECT 1 FROM dual;",
        ])

        statements = split(script, "oracle")

        assert statements == [
            SQLStatement(1, "CREATE OR REPLACE PROCEDURE p AS\nBEGIN\n  NULL;\nEND;\n/"),
            SQLStatement(6, "SELECT 1 FROM dual;"),
        ]

    def test_plsql_block_strip_delimiter(self) -> None:
        statements = split("BEGIN\n  NULL;\nEND;\n/\nSELECT 1 FROM dual;", "oracle", strip_delimiter=True)

        assert [s.sql for s in statements] == ["BEGIN\n  NULL;\nEND;", "SELECT 1 FROM dual"]

    def test_anonymous_block_on_one_line(self) -> None:
        statements = split("DECLARE x NUMBER; BEGIN x := 1; END;\n/", "oracle")

        assert statements == [SQLStatement(1, "DECLARE x NUMBER; BEGIN x := 1; END;\n/")]

    def test_q_quote(self) -> None:
        statements = split("INSERT INTO t VALUES (q'[a;\nit's;\n]');\nSELECT 1 FROM dual;", "oracle")

        assert [s.line_number for s in statements] == [1, 4]

    def test_plain_statement_keeps_semicolon(self) -> None:
        builder = OracleStatementBuilder()
        builder.add_line("CREATE TABLE t (id NUMBER);")

        assert builder.is_terminated

    def test_explicit_delimiter_wins(self) -> None:
        builder = OracleStatementBuilder()
        builder.set_delimiter(Delimiter(";"))
        builder.add_line("BEGIN NULL; END;")

        assert builder.is_terminated


class TestTSQLBuilder:
    """Test SQL Server specific rules."""

    def test_go_batches(self) -> None:
        script = "CREATE TABLE t (id INT);\nINSERT INTO t VALUES (1);\nGO\nSELECT * FROM t\ngo"

        statements = split(script, "mssql")

        assert statements == [
            SQLStatement(1, "CREATE TABLE t (id INT);\nINSERT INTO t VALUES (1);\nGO"),
            SQLStatement(4, "SELECT * FROM t\ngo"),
        ]

    def test_go_batches_strip_delimiter(self) -> None:
        statements = split("SELECT 1;\nGO\nSELECT 2\nGO", "tsql", strip_delimiter=True)

        assert [s.sql for s in statements] == ["SELECT 1;", "SELECT 2"]

    def test_repeated_go_yields_no_empty_batch(self) -> None:
        script = "SELECT 1\nGO\nGO\n\ngo\nSELECT 2\nGO"

        statements = split(script, "tsql", strip_delimiter=True)

        assert statements == [SQLStatement(1, "SELECT 1"), SQLStatement(6, "SELECT 2")]

    def test_go_inside_identifier_or_text(self) -> None:
        statements = split("SELECT [GO\nGO] FROM t\nGO", "sqlserver")

        assert statements == [SQLStatement(1, "SELECT [GO\nGO] FROM t\nGO")]


class TestSQLiteBuilder:
    """Test SQLite specific rules."""

    def test_trigger_body(self) -> None:
        script = "\n".join([
            "CREATE TRIGGER trg AFTER INSERT ON t",
            "BEGIN",
            "  UPDATE t SET x = 1;",
            "END;",
            "SELECT 1;",
        ])

        statements = split(script, "sqlite")

        assert [s.line_number for s in statements] == [1, 5]
        assert statements[0].sql.endswith("END;")

    def test_temp_trigger(self) -> None:
        statements = split("CREATE TEMP TRIGGER trg AFTER DELETE ON t BEGIN\n  DELETE FROM u;\nEND;", "sqlite")

        assert len(statements) == 1

    def test_identifier_ending_in_end(self) -> None:
        script = "\n".join([
            "CREATE TRIGGER trg AFTER INSERT ON t",
            "BEGIN",
            "  UPDATE t SET kind = legend;",
            "  DELETE FROM u;",
            "END;",
        ])

        statements = split(script, "sqlite")

        assert statements == [SQLStatement(1, script)]

    def test_case_expression_inside_trigger(self) -> None:
        script = "\n".join([
            "CREATE TRIGGER trg AFTER UPDATE ON t",
            "BEGIN",
            "  UPDATE u SET flag = CASE WHEN new.x > 0 THEN 1 ELSE 0 END;",
            "  UPDATE u SET label = CASE new.kind",
            "    WHEN 'a' THEN 'END;'",
            "  END;",
            "END;",
            "SELECT 1;",
        ])

        statements = split(script, "sqlite")

        assert [s.line_number for s in statements] == [1, 8]
        assert statements[0].sql.endswith("  END;\nEND;")

    def test_begin_outside_trigger_is_a_transaction(self) -> None:
        statements = split("BEGIN TRANSACTION;\nINSERT INTO t VALUES (1);\nEND TRANSACTION;", "sqlite")

        assert [s.sql for s in statements] == ["BEGIN TRANSACTION;", "INSERT INTO t VALUES (1);", "END TRANSACTION;"]

    def test_trigger_strip_delimiter(self) -> None:
        script = "CREATE TRIGGER trg AFTER INSERT ON t BEGIN\n  DELETE FROM u;\nEND; -- trg"

        statements = split(script, "sqlite", strip_delimiter=True)

        assert statements == [SQLStatement(1, script.replace("END;", "END"))]
