class ReportError(Exception):
    """
    Fatal error that aborts a report run.
    The CLI prints the message and exits with exit_code.
    """

    exit_code = 1

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class MissingDependencyError(ReportError):
    exit_code = 1


class UpstreamQueryError(ReportError):
    """
    A kubectl list query failed. exit_code carries kubectl's own status,
    a kill by signal N (negative returncode) maps to 128 + N like a shell.
    """

    def __init__(self, message: str, exit_code: int = 1, stderr: str = ""):
        if exit_code < 0:
            exit_code = 128 - exit_code
        super().__init__(message, exit_code=exit_code or 1)
        self.stderr = stderr


class SnapshotLoadError(ReportError):
    exit_code = 1


class OutputWriteError(ReportError):
    exit_code = 1
