"""RunningCommand: a spawned process plus the threads feeding its streams.

Endpoints backed by a real file descriptor are handed to the child
directly. Every other endpoint gets a pipe and a pump thread:

- stdin: a feeder thread copies from the StreamSource into the pipe and
  closes it at end of input.
- stdout/stderr: a drain thread copies from the pipe into the StreamSink
  and closes the sink when the pipe is exhausted. A sink that accepts
  nothing (a closed channel) ends the drain early.

Channel endpoints make the pumps block on the channel, so the child
only progresses as fast as the other side of the channel.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from typing import Any, List, Optional

from .exceptions import UnsupportedPipeline
from .iox import StreamSink, StreamSource, reader_from, writer_from
from .iox.readers import ChannelReader
from .process_utils import popen_with_validation
from .template import CommandTemplate

logger = logging.getLogger(__name__)

CHUNK_SIZE = 32 * 1024


def _fileno(adapter: Any) -> Optional[int]:
    """Return the adapter's OS-level file descriptor, if it has a usable one."""
    fileno = getattr(adapter, "fileno", None)
    if fileno is None:
        return None
    try:
        return fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _write_all(pipe: Any, data: bytes) -> None:
    offset = 0
    while offset < len(data):
        offset += pipe.write(data[offset:])


class RunningCommand:
    """A started (or about to be started) process for one CommandTemplate."""

    def __init__(self, cmdt: CommandTemplate):
        self.template = cmdt
        self.process: Optional[subprocess.Popen] = None
        self._drains: List[threading.Thread] = []
        self._feeder: Optional[threading.Thread] = None
        self._feeder_joinable = False
        self._errors: List[BaseException] = []
        self._exit_code: Optional[int] = None

    def __repr__(self) -> str:
        state = "not started"
        if self._exit_code is not None:
            state = f"exited {self._exit_code}"
        elif self.process is not None:
            state = f"pid {self.process.pid}"
        return f"<RunningCommand {self.template.program!r} {state}>"

    @property
    def pid(self) -> Optional[int]:
        return None if self.process is None else self.process.pid

    def start(self) -> "RunningCommand":
        """Resolve endpoints and spawn the process without waiting for it."""
        if self.process is not None:
            raise RuntimeError("command already started")
        cmdt = self.template

        if cmdt.debug is not None:
            cmdt.debug(cmdt.copy())

        from .command import Command

        if isinstance(cmdt.stdin, Command):
            raise UnsupportedPipeline(cmdt.stdin)

        source = None if cmdt.stdin is None else reader_from(cmdt.stdin)
        out_sink = None if cmdt.stdout is None else writer_from(cmdt.stdout)
        merged = cmdt.stderr is not None and cmdt.stderr is cmdt.stdout
        err_sink = None
        if cmdt.stderr is not None and not merged:
            err_sink = writer_from(cmdt.stderr)

        stdin_arg = self._bind(source, "stdin")
        stdout_arg = self._bind(out_sink, "stdout")
        stderr_arg = subprocess.STDOUT if merged else self._bind(err_sink, "stderr")

        logger.debug(
            "spawning %s with args %r (cwd=%s)", cmdt.program, cmdt.args, cmdt.cwd
        )
        try:
            self.process = popen_with_validation(
                cmdt.argv(),
                stdin=stdin_arg,
                stdout=stdout_arg,
                stderr=stderr_arg,
                env=dict(cmdt.env),
                cwd=cmdt.cwd,
                bufsize=0,
            )
        except BaseException:
            # pumped sinks never get a drain thread to close them
            for sink, arg in ((out_sink, stdout_arg), (err_sink, stderr_arg)):
                if sink is not None and arg is subprocess.PIPE:
                    sink.close()
            raise

        if stdin_arg is subprocess.PIPE:
            self._feeder = self._spawn_thread(
                self._feed, source, self.process.stdin, name="stdin"
            )
            self._feeder_joinable = not isinstance(source, ChannelReader)
        if stdout_arg is subprocess.PIPE:
            self._drains.append(
                self._spawn_thread(
                    self._drain, self.process.stdout, out_sink, name="stdout"
                )
            )
        if stderr_arg is subprocess.PIPE:
            self._drains.append(
                self._spawn_thread(
                    self._drain, self.process.stderr, err_sink, name="stderr"
                )
            )
        return self

    def _bind(self, adapter: Any, name: str) -> Any:
        """Pick the Popen argument for one stream: inherit, a raw fd, or a pipe."""
        if adapter is None:
            return None
        fd = _fileno(adapter)
        if fd is not None:
            logger.debug("%s: %s bound directly to fd %d", self.template.program, name, fd)
            return fd
        logger.debug("%s: %s pumped through %s", self.template.program, name, type(adapter).__name__)
        return subprocess.PIPE

    def _spawn_thread(self, target, *args, name: str) -> threading.Thread:
        thread = threading.Thread(
            target=target,
            args=(*args, name),
            name=f"bakesh-{self.template.program}-{name}",
            daemon=True,
        )
        thread.start()
        return thread

    def _feed(self, source: StreamSource, pipe: Any, name: str) -> None:
        try:
            while True:
                chunk = source.read(CHUNK_SIZE)
                if not chunk:
                    break
                _write_all(pipe, chunk)
        except BrokenPipeError:
            logger.debug("%s: process stopped reading %s", self.template.program, name)
        except Exception as exc:
            self._errors.append(exc)
        finally:
            pipe.close()

    def _drain(self, pipe: Any, sink: StreamSink, name: str) -> None:
        try:
            while True:
                chunk = pipe.read(CHUNK_SIZE)
                if not chunk:
                    break
                if sink.write(chunk) == 0:
                    logger.debug(
                        "%s: %s endpoint reached end-of-stream", self.template.program, name
                    )
                    break
        except Exception as exc:
            self._errors.append(exc)
        finally:
            pipe.close()
            try:
                sink.close()
            except Exception as exc:
                self._errors.append(exc)

    def wait(self) -> int:
        """Block until the process exits and its output has been delivered.

        Raises the first error any stream pump hit. The stdin feeder is
        waited for too, unless it reads from a channel.
        """
        if self.process is None:
            raise RuntimeError("command has not been started")
        code = self.process.wait()
        for thread in self._drains:
            thread.join()
        # a channel feeder may block until its producer closes the channel
        if self._feeder is not None and self._feeder_joinable:
            self._feeder.join()
        if self._errors:
            raise self._errors[0]
        if self._exit_code is None:
            logger.debug("%s exited with status %d", self.template.program, code)
        self._exit_code = code
        return code

    def get_exit_code(self) -> int:
        """Exit status of the process; waits for it if necessary."""
        if self._exit_code is None:
            self.wait()
        return self._exit_code
