import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path

@dataclass
class ShellResult:
    killed: bool
    exit_code: int|None

    @property
    def ok(self):
        return not self.killed and self.exit_code == 0

def Shell(cmd: list[str], cwd: Path|None=None) -> ShellResult:
    """
    runs cmd and blocks until it exits, stdout and stderr are the caller's own
    so the child's output passes straight through

    raises OSError if cmd[0] can not be executed at all
    """
    killed = False
    console = subprocess.Popen(cmd, cwd=cwd)
    try:
        console.wait()
    except KeyboardInterrupt:
        killed = True
        try:
            console.send_signal(signal.SIGTERM)
        except ProcessLookupError:
            pass
        console.wait()
    return ShellResult(killed, console.poll())
