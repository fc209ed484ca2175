from typing import Sequence


class PipelineError(Exception):
    """Base class for all errors raised while running a CI pipeline."""

    pass


class RepositoryURLNotFoundError(PipelineError):
    """Raised when no repository URL can be extracted from a webhook payload."""

    pass


class UnsupportedBuildSystemError(PipelineError):
    """Raised when no known build system marker is present in the checkout."""

    pass


class NoTestCommandError(PipelineError):
    """Raised when no known test command applies to the checkout."""

    pass


class DescriptorNotFoundError(PipelineError):
    """Raised when the container build descriptor is missing."""

    pass


class CommandError(PipelineError):
    """Base class for failures of an external command."""

    def __init__(self, args: Sequence[str], message: str):
        super().__init__(message)
        self.command = list(args)


class CommandNotFoundError(CommandError):
    """Raised when an external command cannot be started."""

    pass


class CommandFailedError(CommandError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int):
        super().__init__(args, f"{args[0]} exited with status {returncode}")
        self.returncode = returncode


class CommandTimeoutError(CommandError):
    """Raised when an external command exceeds its deadline and is killed."""

    def __init__(self, args: Sequence[str], timeout: float):
        super().__init__(args, f"{args[0]} timed out after {timeout:g} seconds")
        self.timeout = timeout


class ImageBuildError(PipelineError):
    """Raised when the container build tool fails."""

    pass
