import logging

from coalesce.adapters.diagnostics import (
    SUCCESS,
    ConsoleFormatter,
    DiagnosticCollector,
    DiagnosticsConfig,
    create_console_diagnostics,
)


def emit_all(d) -> None:
    d.error("boom")
    d.warning("careful")
    d.success("done")
    d.info("hello")
    d.verbose("detail")
    d.suggestion("try --help")


def test_default_mode_hides_verbose(capsys):
    emit_all(create_console_diagnostics(DiagnosticsConfig(no_color=True)))
    out, err = capsys.readouterr()

    assert "ERROR: boom" in err
    assert "boom" not in out
    assert "WARNING: careful" in out
    assert "done" in out
    assert "hello" in out
    assert "try --help" in out
    assert "detail" not in out


def test_quiet_mode_keeps_warnings_errors_and_suggestions(capsys):
    emit_all(create_console_diagnostics(DiagnosticsConfig(quiet=True, no_color=True)))
    out, err = capsys.readouterr()

    assert "ERROR: boom" in err
    assert "WARNING: careful" in out
    assert "try --help" in out
    assert "done" not in out
    assert "hello" not in out
    assert "detail" not in out


def test_verbose_mode_shows_everything(capsys):
    emit_all(create_console_diagnostics(DiagnosticsConfig(verbose=True, no_color=True)))
    out, _ = capsys.readouterr()

    assert "detail" in out
    assert "hello" in out


def test_quiet_wins_over_verbose(capsys):
    d = create_console_diagnostics(DiagnosticsConfig(quiet=True, verbose=True, no_color=True))
    d.verbose("detail")
    out, _ = capsys.readouterr()

    assert "--quiet takes precedence" in out
    assert "detail" not in out


def test_formatter_colors_only_when_enabled():
    record = logging.LogRecord("coalesce", SUCCESS, __file__, 1, "done", None, None)

    assert ConsoleFormatter(color=False).format(record) == "done"
    assert ConsoleFormatter(color=True).format(record) == "\033[32mdone\033[0m"


def test_collector_records_in_order():
    c = DiagnosticCollector()
    emit_all(c)

    assert [it.severity for it in c.items] == [
        "error", "warning", "success", "info", "verbose", "suggestion",
    ]
    assert c.messages("info") == ["hello"]
