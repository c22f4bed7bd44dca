class PassCancelledError(Exception):
    """
    Exception raised when a build or render pass observes its cancellation token.

    Cancellation is an expected outcome during interactive use (a newer pass superseded
    this one, or the user stopped it) and callers should not treat it as a failure.
    Any partially built tree or partially rendered text must be discarded.

    Example:
        >>> str(PassCancelledError())
        'Tree generation pass was cancelled'
    """

    def __init__(self, message: str = "Tree generation pass was cancelled") -> None:
        super().__init__(message)


class GenerationError(Exception):
    """
    Base class for unexpected faults during a tree generation pass.

    Attributes:
        cause (BaseException): The underlying exception that aborted the pass.
    """

    stage = "generation"

    def __init__(self, cause: BaseException) -> None:
        """
        Initialize the exception from the underlying cause.

        Args:
            cause (BaseException): The exception that escaped the failing step.
        """
        self.cause = cause
        super().__init__(f"Tree {self.stage} failed: {cause}")


class BuildFailedError(GenerationError):
    """
    Exception raised when folding path entries into the tree fails.

    Example:
        >>> error = BuildFailedError(ValueError("Invalid size -1 for 'root/a.txt'"))
        >>> str(error)
        "Tree build failed: Invalid size -1 for 'root/a.txt'"
    """

    stage = "build"


class RenderFailedError(GenerationError):
    """
    Exception raised when serializing a built tree to text fails.

    Example:
        >>> str(RenderFailedError(KeyError("style")))
        "Tree render failed: 'style'"
    """

    stage = "render"
