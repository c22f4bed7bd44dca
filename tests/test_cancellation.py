"""Tests for the cooperative cancellation token."""

import threading

import pytest

from treegenius.cancellation import CancellationToken
from treegenius.exceptions import PassCancelledError


def test_new_token_is_not_cancelled():
    token = CancellationToken()
    assert not token.cancelled
    token.raise_if_cancelled()  # Should not raise


def test_cancel_is_idempotent():
    token = CancellationToken()
    token.cancel()
    token.cancel()
    assert token.cancelled
    with pytest.raises(PassCancelledError):
        token.raise_if_cancelled()


def test_cancel_from_another_thread():
    token = CancellationToken()
    thread = threading.Thread(target=token.cancel)
    thread.start()
    thread.join()
    assert token.cancelled
