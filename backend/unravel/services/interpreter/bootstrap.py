"""Child-side runner for SubprocessInterpreter.

Run as ``python -I -u bootstrap.py <source-path>``. Only the standard library
may be imported here: in isolated mode the child cannot see the unravel
package.

Protocol (one JSON object per line on the real stdout):

    {"type": "output", "text": "..."}   a chunk written to stdout/stderr
    {"type": "input", "prompt": "..."}  input() was called; the parent answers
                                        with one JSON string line on stdin
    {"type": "error", "traceback": "..."}
    {"type": "done"}

The program is compiled with the filename ``<string>`` so tracebacks carry
``File "<string>", line N`` for the submitted code.
"""

from __future__ import annotations

import builtins
import io
import json
import sys
import traceback

PROGRAM_FILENAME = "<string>"


def format_program_traceback(exc: BaseException) -> str:
    """Format ``exc`` keeping only the frames of the submitted program."""
    tb = exc.__traceback__
    while tb is not None and tb.tb_frame.f_code.co_filename != PROGRAM_FILENAME:
        tb = tb.tb_next
    return "".join(traceback.format_exception(type(exc), exc, tb)).rstrip()


def is_clean_exit(exc: SystemExit) -> bool:
    return exc.code is None or exc.code == 0


class _FrameWriter:
    def __init__(self, send):
        self._send = send

    def write(self, text):
        if text:
            self._send("output", text=str(text))
        return len(text)

    def flush(self):
        pass


def main(argv):
    channel = sys.stdout
    replies = sys.stdin
    channel.reconfigure(encoding="utf-8")
    replies.reconfigure(encoding="utf-8")

    def send(kind, **payload):
        payload["type"] = kind
        channel.write(json.dumps(payload) + "\n")
        channel.flush()

    def ask(prompt=None):
        send("input", prompt=None if prompt is None else str(prompt))
        reply = replies.readline()
        if not reply:
            return ""
        return str(json.loads(reply))

    with open(argv[1], encoding="utf-8") as fh:
        source = fh.read()

    writer = _FrameWriter(send)
    sys.stdout = writer
    sys.stderr = writer
    sys.stdin = io.StringIO("")
    builtins.input = ask
    namespace = {"__name__": "__main__", "__builtins__": builtins}

    try:
        exec(compile(source, PROGRAM_FILENAME, "exec"), namespace)
    except SystemExit as exc:
        if not is_clean_exit(exc):
            send("error", traceback=format_program_traceback(exc))
            return 0
    except BaseException as exc:  # noqa: BLE001
        send("error", traceback=format_program_traceback(exc))
        return 0
    send("done")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
