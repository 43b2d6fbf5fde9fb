"""
Error/success banner state for the admin view.

Errors stay until the user dismisses them or the next operation succeeds.
Success confirmations clear themselves after a fixed interval.
"""

import asyncio
import logging
from typing import Optional

from ..errors import CourseAdminError


logger = logging.getLogger(__name__)


class StatusMessages:
    """
    Examples:
        >>> messages = StatusMessages(success_timeout=3.0)
        >>> messages.show_success("Course created")   # gone after 3 s
        >>> messages.show_error(RemoteRejected("not found"))
        >>> messages.error
        'not found'
    """

    def __init__(self, success_timeout: float = 3.0):
        self.success_timeout = success_timeout
        self.error: Optional[str] = None
        self.last_error: Optional[CourseAdminError] = None
        self.success: Optional[str] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._closed = False

    def show_error(self, error: CourseAdminError):
        if self._closed:
            return
        self.last_error = error
        self.error = error.message

    def dismiss_error(self):
        self.last_error = None
        self.error = None

    def show_success(self, message: str):
        """
        Show a success banner and schedule its removal.

        Without a running event loop the banner stays until replaced.
        Ignored once the view is closed.
        """
        if self._closed:
            return
        self._cancel_timer()
        self.success = message
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._timer = loop.call_later(self.success_timeout, self.clear_success)

    def clear_success(self):
        self._cancel_timer()
        self.success = None

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def close(self):
        self._closed = True
        self._cancel_timer()
