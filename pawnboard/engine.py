"""Background position evaluation through an external UCI engine."""

from __future__ import annotations

import re
import subprocess
import threading
import time
from collections.abc import Sequence
from pathlib import Path

DEFAULT_COMMAND = ("stockfish/stockfish-ubuntu-x86-64-avx2",)

_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)")


def parse_score(output: str) -> float | None:
    """Score from the last ``score`` field of engine output, or None.

    Only the first three characters of a centipawn value and the first two
    of a mate distance are read.
    """
    marker = "score "
    index = output.rfind(marker)
    if index < 0:
        return None
    tail = output[index + len(marker):]
    if tail.startswith("cp"):
        digits = tail[3:6]
    elif tail.startswith("mate"):
        digits = tail[5:7]
    else:
        return None
    match = _NUMBER.match(digits)
    return float(match.group()) if match else None


class Engine:
    """Sends the game's move history to an engine and keeps its latest score."""

    def __init__(
        self,
        command: str | Sequence[str] = DEFAULT_COMMAND,
        command_file: str | Path | None = "command.txt",
        depth: int = 20,
        wait: float = 3.0,
    ) -> None:
        self.command = [command] if isinstance(command, str) else list(command)
        self.command_file = Path(command_file) if command_file is not None else None
        self.depth = depth
        self.wait = wait
        self.history: list[str] = []
        self.evaluation = 0.0
        self._updated = False
        self._lock = threading.RLock()

    def command_text(self) -> str:
        """The commands sent to the engine for the current history."""
        with self._lock:
            moves = "".join(f"{move} " for move in self.history)
        return f"position startpos move {moves}\nd\ngo depth {self.depth}\n"

    def _execute(self, text: str) -> str:
        try:
            process = subprocess.Popen(
                self.command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
            )
        except OSError:
            return ""
        try:
            process.stdin.write(text)
            process.stdin.flush()
        except BrokenPipeError:
            pass
        # Give the engine time to search before its input is closed.
        time.sleep(self.wait)
        output, _ = process.communicate()
        return output or ""

    def run(self, move: str) -> float:
        """Add a move to the history, ask the engine, and return the score."""
        with self._lock:
            self.history.append(move)
            text = self.command_text()
        if self.command_file is not None:
            self.command_file.write_text(text)
        score = parse_score(self._execute(text))
        with self._lock:
            if score is not None:
                self.evaluation = score
            self._updated = True
            return self.evaluation

    def run_async(self, move: str) -> threading.Thread:
        """Run the engine for a move on a background thread."""
        thread = threading.Thread(target=self.run, args=(move,), daemon=True)
        thread.start()
        return thread

    def take_update(self) -> float | None:
        """The score if a new one arrived since the last call, else None."""
        with self._lock:
            if not self._updated:
                return None
            self._updated = False
            return self.evaluation