from unravel.models import ErrorCategory, ExecutionStatus
from unravel.services.execution import (
    NO_OUTPUT,
    NO_OUTPUT_DUE_TO_ERROR,
    ExecutionCoordinator,
    OutputAccumulator,
    analyze_and_run,
    run_and_translate,
)
from unravel.services.interpreter import (
    InterpreterUnavailableError,
    ProgramFailedError,
    ScriptedInputProvider,
)


class FakeInterpreter:
    """Scripted interpreter: emits chunks, then optionally raises."""

    name = "fake"
    supports_input = True

    def __init__(self, chunks=(), raise_exc=None, fail_initialize=False):
        self.chunks = list(chunks)
        self.raise_exc = raise_exc
        self.fail_initialize = fail_initialize
        self.initialize_calls = 0
        self.hook_installs = 0
        self.output_sink = None
        self.input_source = None

    def initialize(self, config):
        self.initialize_calls += 1
        if self.fail_initialize:
            raise InterpreterUnavailableError("Failed to load runtime (line 4 of loader)")

    def install_hooks(self, *, output_sink, input_source=None):
        self.hook_installs += 1
        self.output_sink = output_sink
        self.input_source = input_source

    def execute(self, source):
        for chunk in self.chunks:
            self.output_sink(chunk)
        if self.raise_exc is not None:
            raise self.raise_exc


def _coordinator(interpreter, interpreter_config, **kwargs):
    statuses = []
    coordinator = ExecutionCoordinator(
        interpreter,
        config=interpreter_config,
        on_status=statuses.append,
        **kwargs,
    )
    return coordinator, statuses


def test_success_with_output(interpreter_config):
    coordinator, statuses = _coordinator(FakeInterpreter(["0", "\n", "1", "\n"]), interpreter_config)
    assert coordinator.status is ExecutionStatus.NOT_READY

    result = coordinator.run("for i in range(2): print(i)")

    assert result.captured_output == "0\n1"
    assert result.failure is None
    assert result.status is ExecutionStatus.FINISHED
    assert statuses == [
        ExecutionStatus.PREPARING,
        ExecutionStatus.RUNNING,
        ExecutionStatus.FINISHED,
    ]
    assert coordinator.status_message == "Execution finished."


def test_success_without_output_uses_placeholder(interpreter_config):
    coordinator, _ = _coordinator(FakeInterpreter(["  \n"]), interpreter_config)
    assert coordinator.run("x = 1").captured_output == NO_OUTPUT


def test_program_failure_keeps_earlier_output(interpreter_config):
    raw = 'Traceback (most recent call last):\n  File "<string>", line 2, in <module>\nZeroDivisionError: division by zero'
    coordinator, statuses = _coordinator(
        FakeInterpreter(["before\n"], raise_exc=ProgramFailedError(raw)),
        interpreter_config,
    )

    result = coordinator.run("print('before')\n1/0")

    assert result.captured_output == "before"
    assert result.failure.category is ErrorCategory.ZERO_DIVISION
    assert result.failure.line_number == 2
    assert result.failure.raw_message == raw
    assert result.status is ExecutionStatus.FINISHED_WITH_ERRORS
    assert statuses[-1] is ExecutionStatus.FINISHED_WITH_ERRORS


def test_program_failure_without_output_uses_error_placeholder(interpreter_config):
    coordinator, _ = _coordinator(
        FakeInterpreter(raise_exc=ProgramFailedError("NameError: name 'foo' is not defined")),
        interpreter_config,
    )
    result = coordinator.run("foo")

    assert result.captured_output == NO_OUTPUT_DUE_TO_ERROR
    assert result.failure.category is ErrorCategory.NAME
    assert len(result.failure.hints) == 2


def test_initialize_failure_is_unexpected(interpreter_config):
    coordinator, statuses = _coordinator(FakeInterpreter(fail_initialize=True), interpreter_config)

    result = coordinator.run("print(1)")

    assert result.captured_output == ""
    assert result.failure.category is ErrorCategory.UNEXPECTED
    assert result.failure.friendly_message == "Unexpected failure while running code."
    assert result.failure.line_number == 4
    assert result.failure.hints == ()
    assert statuses == [ExecutionStatus.PREPARING, ExecutionStatus.FAILED]


def test_interpreter_crash_during_execute_is_unexpected(interpreter_config):
    coordinator, _ = _coordinator(
        FakeInterpreter(["partial"], raise_exc=RuntimeError("worker died")),
        interpreter_config,
    )
    result = coordinator.run("print(1)")

    assert result.status is ExecutionStatus.FAILED
    assert result.failure.category is ErrorCategory.UNEXPECTED
    assert result.captured_output == ""


def test_initialize_once_and_hooks_every_run(interpreter_config):
    interpreter = FakeInterpreter(["x"])
    coordinator, _ = _coordinator(interpreter, interpreter_config)

    coordinator.run("a")
    first_sink = interpreter.output_sink
    coordinator.run("b")

    assert interpreter.initialize_calls == 1
    assert interpreter.hook_installs == 2
    assert interpreter.output_sink is not first_sink


def test_output_does_not_leak_between_runs(interpreter_config):
    coordinator, _ = _coordinator(FakeInterpreter(["same"]), interpreter_config)
    coordinator.run("a")
    assert coordinator.run("b").captured_output == "same"


def test_input_source_uses_provider_and_dismissal_is_empty(interpreter_config):
    interpreter = FakeInterpreter()
    provider = ScriptedInputProvider(["Ada"])
    coordinator, _ = _coordinator(interpreter, interpreter_config, input_provider=provider)
    coordinator.run("name = input()")

    assert interpreter.input_source("Name? ") == "Ada"
    assert interpreter.input_source("Again? ") == ""
    assert provider.prompts == ["Name? ", "Again? "]


def test_no_input_source_when_unsupported(interpreter_config):
    interpreter = FakeInterpreter()
    interpreter.supports_input = False
    coordinator, _ = _coordinator(interpreter, interpreter_config)
    coordinator.run("x")
    assert interpreter.input_source is None


def test_output_accumulator_concatenates_and_trims_trailing_whitespace():
    accumulator = OutputAccumulator()
    for chunk in ["  a", " ", "b", "\n", "", "\n\n"]:
        accumulator.write(chunk)
    assert accumulator.text == "  a b"
    assert OutputAccumulator().render("(empty)") == "(empty)"


def test_run_and_translate_with_embedded_interpreter(embedded_interpreter, interpreter_config):
    result = run_and_translate("print('hi')", embedded_interpreter, config=interpreter_config)
    assert result.captured_output == "hi"
    assert result.succeeded


def test_analyze_and_run_explains_even_when_run_fails(embedded_interpreter, interpreter_config):
    coordinator = ExecutionCoordinator(embedded_interpreter, config=interpreter_config)

    records, result = analyze_and_run("x = 1\nprint(y)\n", coordinator=coordinator)

    assert len(records) == 3
    assert result.failure.category is ErrorCategory.NAME
    assert result.failure.line_number == 2
    assert "'y'" in result.failure.friendly_message


def test_braces_in_undefined_name_still_yield_a_result(embedded_interpreter, interpreter_config):
    coordinator = ExecutionCoordinator(embedded_interpreter, config=interpreter_config)

    result = coordinator.run("raise NameError(\"name '{oops}' is not defined\")\n")

    assert result.status is ExecutionStatus.FINISHED_WITH_ERRORS
    assert result.failure.category is ErrorCategory.NAME
    assert "'{oops}'" in result.failure.friendly_message


def test_raising_status_listener_does_not_break_the_run(interpreter_config):
    def listener(status):
        raise RuntimeError("listener broke")

    coordinator = ExecutionCoordinator(
        FakeInterpreter(["ok"]),
        config=interpreter_config,
        on_status=listener,
    )
    result = coordinator.run("print('ok')")

    assert result.captured_output == "ok"
    assert result.status is ExecutionStatus.FINISHED
    assert coordinator.status is ExecutionStatus.FINISHED
