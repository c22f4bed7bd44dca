"""Orchestration of build and render passes.

This module provides the GenerationController, which runs one build+render pass
per (paths, configuration) change on an asyncio event loop. Submitting a new
pass cancels the one in flight, so only the most recent submission can publish
results. The synchronous generate_tree helper runs a single pass to completion.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from treegenius.cancellation import CancellationToken
from treegenius.config import TreeConfig
from treegenius.exceptions import GenerationError, PassCancelledError
from treegenius.path_tree.statistics import TreeStatistics
from treegenius.path_tree.tree_builder import EntryLike, TreeBuilder
from treegenius.rendering.tree_renderer import TreeRenderer

logger = logging.getLogger(__name__)

CANCELLED_MARKER = "\n[generation cancelled]\n"


class PassState(Enum):
    """Lifecycle states of the controller's active pass."""

    IDLE = "idle"
    PENDING = "pending"
    BUILDING = "building"
    RENDERING = "rendering"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"


class OutcomeStatus(Enum):
    SUCCESS = "success"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class PassOutcome:
    """Terminal outcome of one pass.

    Attributes:
        status (OutcomeStatus): SUCCESS, CANCELLED or FAILED.
        reason (Optional[str]): Error description for FAILED outcomes.
    """

    status: OutcomeStatus
    reason: Optional[str] = None


@dataclass(frozen=True)
class GenerationResult:
    """Rendered text and the statistics of the tree it was rendered from."""

    text: str
    statistics: TreeStatistics


async def run_pass(
    entries: Iterable[EntryLike],
    root_name: str,
    config: TreeConfig,
    cancellation_token: Optional[CancellationToken] = None,
    on_stage: Optional[Callable[[PassState], None]] = None,
) -> GenerationResult:
    """Build and render one tree.

    Args:
        entries: Path entries whose first segment is the root folder name.
        root_name: Label of the rendered root.
        config: Options for filtering and rendering.
        cancellation_token: Token shared by the builder and renderer of this pass.
        on_stage: Called with BUILDING and RENDERING as the pass progresses.

    Returns:
        The rendered text and statistics, derived from the same tree.

    Raises:
        PassCancelledError: If the token is cancelled at a suspension point.
        BuildFailedError: If building fails.
        RenderFailedError: If rendering fails.
    """
    token = cancellation_token or CancellationToken()

    if on_stage is not None:
        on_stage(PassState.BUILDING)
    root, statistics = await TreeBuilder(config.exclusion_rules(), token).build(entries)

    if on_stage is not None:
        on_stage(PassState.RENDERING)
    text = await TreeRenderer(config, token).render(root, root_name, statistics)

    return GenerationResult(text, statistics)


def generate_tree(
    entries: Iterable[EntryLike], root_name: str, config: Optional[TreeConfig] = None
) -> Tuple[str, TreeStatistics]:
    """Run a single pass to completion outside of any event loop.

    Example:
        >>> text, stats = generate_tree([("root/a.txt", 10)], "root")
        >>> print(text, end="")
        root
        └── a.txt
        >>> stats.file_count
        1

    Raises:
        BuildFailedError: If building fails.
        RenderFailedError: If rendering fails.
    """
    result = asyncio.run(run_pass(entries, root_name, config or TreeConfig()))
    return result.text, result.statistics


class GenerationController:
    """Runs build+render passes with superseding semantics.

    At most one pass is active. ``submit`` cancels the active pass before starting
    a new one, and every pass checks its token immediately before publishing, so a
    slow pass that finishes after being superseded never overwrites newer results.
    Each pass builds its own tree and statistics; the only shared state is the
    active token.

    A successful pass publishes ``result`` and clears ``error``. A cancelled pass
    publishes nothing. A failed pass sets ``error`` and leaves ``result`` as it was.

    Attributes:
        settle_delay (float): Seconds to wait before a submitted pass starts building.
            Rapid successive submissions only build the last one.
        state (PassState): State of the most recent pass. PENDING from ``submit``
            until building starts.
        result (Optional[GenerationResult]): Output of the last successful pass.
        error (Optional[str]): Description of the failure if the last pass failed.
        last_outcome (Optional[PassOutcome]): Outcome of the most recent finished pass.

    Example:
        >>> async def demo():
        ...     controller = GenerationController(settle_delay=0)
        ...     outcome = await controller.submit([("root/a.txt", 10)], "root", TreeConfig())
        ...     return outcome.status, controller.result.statistics.file_count
        >>> asyncio.run(demo())
        (<OutcomeStatus.SUCCESS: 'success'>, 1)
    """

    def __init__(
        self,
        settle_delay: float = 0.05,
        on_update: Optional[Callable[["GenerationController"], None]] = None,
    ) -> None:
        self.settle_delay = settle_delay
        self.on_update = on_update
        self.state = PassState.IDLE
        self.result: Optional[GenerationResult] = None
        self.error: Optional[str] = None
        self.last_outcome: Optional[PassOutcome] = None
        self._active_token: Optional[CancellationToken] = None
        self._active_task: Optional["asyncio.Task[PassOutcome]"] = None
        self._pass_number = 0

    @property
    def busy(self) -> bool:
        return self.state in (PassState.PENDING, PassState.BUILDING, PassState.RENDERING)

    def submit(
        self, entries: Iterable[EntryLike], root_name: str, config: TreeConfig
    ) -> "asyncio.Task[PassOutcome]":
        """Start a new pass, superseding any pass still in flight.

        Must be called from a coroutine or callback running on an event loop.
        The entries are materialized immediately so later mutation by the caller
        cannot affect the pass.

        Returns:
            The task running the pass; its result is the pass outcome.
        """
        if self._active_token is not None and not self._active_token.cancelled:
            logger.info("Superseding pass #%d", self._pass_number)
            self._active_token.cancel()

        self._pass_number += 1
        token = CancellationToken()
        self._active_token = token
        snapshot: List[EntryLike] = list(entries)
        task = asyncio.get_running_loop().create_task(
            self._run(self._pass_number, snapshot, root_name, config, token)
        )
        self._active_task = task
        self._set_state(token, PassState.PENDING)
        return task

    def cancel(self) -> None:
        """Cancel the active pass. Cancelling a finished or cancelled pass is a no-op."""
        if self._active_token is not None:
            self._active_token.cancel()

    async def wait(self) -> Optional[PassOutcome]:
        """Wait for the most recently submitted pass and return its outcome."""
        if self._active_task is None:
            return None
        return await self._active_task

    def display_text(self) -> str:
        """Text to show for the current state.

        The error description while the last completed pass is a failure,
        otherwise the last successful rendering. A cancellation marker is appended
        to either when the latest pass was cancelled.
        """
        if self.error is not None:
            text = self.error
        else:
            text = self.result.text if self.result is not None else ""
        if self.last_outcome is not None and self.last_outcome.status is OutcomeStatus.CANCELLED:
            text += CANCELLED_MARKER
        return text

    def _is_active(self, token: CancellationToken) -> bool:
        return token is self._active_token

    def _set_state(self, token: CancellationToken, state: PassState) -> None:
        if not self._is_active(token):
            return
        self.state = state
        if self.on_update is not None:
            self.on_update(self)

    def _finish(self, token: CancellationToken, state: PassState, outcome: PassOutcome) -> PassOutcome:
        if self._is_active(token):
            self.last_outcome = outcome
        self._set_state(token, state)
        return outcome

    async def _run(
        self,
        number: int,
        entries: List[EntryLike],
        root_name: str,
        config: TreeConfig,
        token: CancellationToken,
    ) -> PassOutcome:
        logger.debug("Pass #%d scheduled with %d entries", number, len(entries))
        try:
            await asyncio.sleep(self.settle_delay)
            token.raise_if_cancelled()

            result = await run_pass(
                entries, root_name, config, token, on_stage=lambda state: self._set_state(token, state)
            )

            # Publish only if nothing superseded or stopped this pass
            token.raise_if_cancelled()
        except PassCancelledError:
            logger.info("Pass #%d cancelled", number)
            return self._finish(token, PassState.CANCELLED, PassOutcome(OutcomeStatus.CANCELLED))
        except GenerationError as e:
            logger.error("Pass #%d failed: %s", number, e)
            if self._is_active(token):
                self.error = str(e)
            return self._finish(token, PassState.FAILED, PassOutcome(OutcomeStatus.FAILED, str(e)))

        self.result = result
        self.error = None
        logger.info(
            "Pass #%d published: %d directories, %d files",
            number,
            result.statistics.directory_count,
            result.statistics.file_count,
        )
        return self._finish(token, PassState.DONE, PassOutcome(OutcomeStatus.SUCCESS))
