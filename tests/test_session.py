from pathlib import Path

import pytest

from macroloop.core.types import StatusCode
from macroloop.errors import CommandNotFoundError, ExecutorError, IllegalParameterError, ScriptOpenError
from macroloop.runtime.session import BatchSession


def _write_macro(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "run.mac"
    path.write_text(text, encoding="utf-8")
    return path


def test_run_dispatches_commands_and_returns_previous(tmp_path: Path, executor, console) -> None:
    macro = _write_macro(tmp_path, "/run/initialize\n/gun/energy \\\n  10 MeV\n\n/run/beamOn 3 # go\n")
    previous = object()

    with BatchSession(macro, previous, executor=executor, console=console) as session:
        result = session.run()

    assert executor.applied == ["/run/initialize", "/gun/energy 10 MeV", "/run/beamOn 3"]
    assert result.previous is previous
    assert result.ok
    assert result.commands == 3


def test_exit_line_stops_the_session(tmp_path: Path, executor, console) -> None:
    macro = _write_macro(tmp_path, "a\nexit\nb\n")

    with BatchSession(macro, executor=executor, console=console) as session:
        session.run()

    assert executor.applied == ["a"]


def test_comments_echo_only_at_echo_level(tmp_path: Path, executor, console, console_buffer) -> None:
    macro = _write_macro(tmp_path, "# first step\na\n")

    with BatchSession(macro, executor=executor, console=console) as session:
        session.run()
    assert console_buffer.getvalue() == ""

    executor.verbose_level = 2
    with BatchSession(macro, executor=executor, console=console) as session:
        session.run()
    assert console_buffer.getvalue() == "# first step\n"
    assert executor.applied == ["a", "a"]


def test_fatal_status_halts_session(tmp_path: Path, executor, console) -> None:
    executor.codes["/oops"] = StatusCode.NOT_FOUND
    macro = _write_macro(tmp_path, "a\n/oops\nb\n")

    with BatchSession(macro, "prev", executor=executor, console=console) as session:
        result = session.run()

    assert executor.applied == ["a", "/oops"]
    assert isinstance(result.error, CommandNotFoundError)
    assert result.previous == "prev"
    assert result.commands == 1
    assert not result.ok


def test_illegal_parameter_reports_index(tmp_path: Path, executor, console, console_buffer) -> None:
    executor.codes["/gun/energy abc"] = 301
    macro = _write_macro(tmp_path, "/gun/energy abc\n")

    with BatchSession(macro, executor=executor, console=console) as session:
        result = session.run()

    assert isinstance(result.error, IllegalParameterError)
    assert result.error.parameter_index == 1
    assert "(1) </gun/energy abc>" in console_buffer.getvalue()


def test_executor_failure_warns_and_continues(tmp_path: Path, console, log_records) -> None:
    class FlakyExecutor:
        verbose_level = 0

        def __init__(self) -> None:
            self.applied: list[str] = []

        def apply(self, command: str) -> int:
            self.applied.append(command)
            if command == "flaky":
                raise ExecutorError("timeout")
            return StatusCode.SUCCEEDED

    executor = FlakyExecutor()
    macro = _write_macro(tmp_path, "flaky\nsteady\n")

    with BatchSession(macro, executor=executor, console=console) as session:
        result = session.run()

    assert executor.applied == ["flaky", "steady"]
    assert result.ok
    assert result.warnings == 1
    assert result.commands == 1
    messages = [record["message"] for record in log_records if record["level"].name == "WARNING"]
    assert messages == ["A problem occurred with the previous command. Keep reading the macro."]


def test_missing_file_raises_script_open_error(tmp_path: Path, executor) -> None:
    missing = tmp_path / "missing.mac"

    with pytest.raises(ScriptOpenError) as exc_info:
        BatchSession(missing, executor=executor)

    assert exc_info.value.path == missing
    assert "Cannot open macro file" in str(exc_info.value)


def test_lenient_missing_file_defers_to_previous(tmp_path: Path, executor) -> None:
    previous = object()
    session = BatchSession(tmp_path / "missing.mac", previous, executor=executor, strict=False)

    result = session.run()

    assert not session.opened
    assert result.previous is previous
    assert result.commands == 0
    assert executor.applied == []
    session.close()


def test_close_is_idempotent(tmp_path: Path, executor, console) -> None:
    macro = _write_macro(tmp_path, "a\n")
    session = BatchSession(macro, executor=executor, console=console)
    assert session.opened

    session.close()
    session.close()

    assert not session.opened
    assert session.run().commands == 0


def test_pause_brackets_run_with_messages(tmp_path: Path, executor, console, log_records) -> None:
    macro = _write_macro(tmp_path, "a\n")

    with BatchSession(macro, executor=executor, console=console) as session:
        result = session.pause("G4_pause> ")

    assert result.commands == 1
    messages = [record["message"] for record in log_records if record["level"].name == "INFO"]
    assert messages == ["Pause session <G4_pause> > start.", "Pause session <G4_pause> > Terminate."]


def test_session_log_records_carry_script_path(tmp_path: Path, executor, console, log_records) -> None:
    macro = _write_macro(tmp_path, "a\n")

    with BatchSession(macro, executor=executor, console=console) as session:
        session.pause("nested")

    assert log_records
    assert all(record["extra"]["script"] == str(macro) for record in log_records if "Pause" in record["message"])


def test_undecodable_bytes_do_not_stop_the_session(tmp_path: Path, executor, console) -> None:
    macro = tmp_path / "latin1.mac"
    macro.write_bytes(b"/run/initialize\n/control/echo caf\xe9\n/run/beamOn 1\n")

    with BatchSession(macro, executor=executor, console=console) as session:
        result = session.run()

    assert result.ok
    assert executor.applied == ["/run/initialize", "/control/echo caf\ufffd", "/run/beamOn 1"]


def test_byte_order_mark_does_not_hide_leading_comment(tmp_path: Path, executor, console) -> None:
    macro = tmp_path / "bom.mac"
    macro.write_bytes(b"\xef\xbb\xbf# header\n/run/beamOn 1\n")

    with BatchSession(macro, executor=executor, console=console) as session:
        result = session.run()

    assert result.commands == 1
    assert executor.applied == ["/run/beamOn 1"]


def test_strict_open_failure_is_raised_not_logged(tmp_path: Path, executor, log_records) -> None:
    with pytest.raises(ScriptOpenError):
        BatchSession(tmp_path / "missing.mac", executor=executor)

    assert [record for record in log_records if record["level"].name == "ERROR"] == []


def test_lenient_open_failure_is_logged(tmp_path: Path, executor, log_records) -> None:
    BatchSession(tmp_path / "missing.mac", executor=executor, strict=False)

    errors = [record["message"] for record in log_records if record["level"].name == "ERROR"]
    assert len(errors) == 1
    assert "Cannot open macro file" in errors[0]
