"""Cooperative cancellation token shared by the builder and renderer of one pass."""

from threading import Event

from treegenius.exceptions import PassCancelledError


class CancellationToken:
    """Flag checked at suspension points of a generation pass.

    The token wraps a ``threading.Event`` so it can be set from the event loop
    thread or from any other thread. Cancelling is idempotent.

    Example:
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.cancel()
        >>> token.cancel()
        >>> token.cancelled
        True
    """

    def __init__(self) -> None:
        self._event = Event()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Calling this more than once has no further effect."""
        self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise PassCancelledError if cancellation has been requested.

        Raises:
            PassCancelledError: If the token has been cancelled.
        """
        if self._event.is_set():
            raise PassCancelledError()
