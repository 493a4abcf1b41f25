"""
Form submission state machine.

    IDLE -> SUBMITTING -> SUCCESS | FAILED
    FAILED -> SUBMITTING   (resubmission)

SUCCESS navigates away and is terminal for the page instance.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import Enum

from betportal.auth.schemas import AuthResult
from betportal.shared.exceptions import NETWORK_ERROR_MESSAGE, NotReadyError
from betportal.shared.logging import get_logger
from betportal.ui.navigation import Navigator

logger = get_logger(__name__)


class SubmissionPhase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class SubmissionFlow:
    """Drive one page's submissions and hold the inline error text."""

    def __init__(
        self,
        navigator: Navigator,
        success_route: str,
        failure_message: str,
        error_message: str = NETWORK_ERROR_MESSAGE,
    ) -> None:
        """Initialize the flow.

        Args:
            navigator: Navigation capability used on success.
            success_route: Route replacing the page after success.
            failure_message: Fallback when the backend refuses without a message.
            error_message: Fallback when the call raises without a message.
        """
        self._navigator = navigator
        self._success_route = success_route
        self._failure_message = failure_message
        self._error_message = error_message
        self.phase = SubmissionPhase.IDLE
        self.error: str | None = None

    @property
    def is_submitting(self) -> bool:
        return self.phase == SubmissionPhase.SUBMITTING

    def clear_error(self) -> None:
        self.error = None

    async def submit(
        self,
        ready: bool,
        call: Callable[[], Awaitable[AuthResult]],
    ) -> SubmissionPhase:
        """Run one submission.

        Args:
            ready: Whether the page is mounted and its client loaded.
            call: Performs the remote call; only invoked when ``ready``.

        Returns:
            The phase after the attempt.
        """
        if self.phase in (SubmissionPhase.SUBMITTING, SubmissionPhase.SUCCESS):
            logger.debug("Submission ignored", extra={"phase": self.phase.value})
            return self.phase

        if not ready:
            self.error = NotReadyError().message
            logger.info("Submission rejected: not ready")
            return self.phase

        self.phase = SubmissionPhase.SUBMITTING
        self.error = None

        try:
            result = await call()
        except Exception as e:
            message = getattr(e, "message", None) or str(e)
            logger.warning(
                "Submission failed",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            return self._fail(message or self._error_message)

        if not result.success:
            return self._fail(result.message or self._failure_message)

        self.phase = SubmissionPhase.SUCCESS
        logger.info("Submission succeeded", extra={"route": self._success_route})
        self._navigator.replace(self._success_route)
        return self.phase

    def _fail(self, message: str) -> SubmissionPhase:
        self.phase = SubmissionPhase.FAILED
        self.error = message
        return self.phase
