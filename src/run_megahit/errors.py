class UsageError(Exception):
    pass

class ExecutionError(Exception):
    def __init__(self, cmd: list[str], exit_code: int|None, killed: bool=False) -> None:
        self.cmd = cmd
        self.exit_code = exit_code
        self.killed = killed
        super().__init__(f"FATAL ERROR! Could not execute command:\n{' '.join(cmd)}\n")
