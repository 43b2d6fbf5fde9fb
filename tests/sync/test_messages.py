"""
Unit tests for StatusMessages.
"""

import asyncio

from course_admin.errors import RemoteRejected
from course_admin.sync.messages import StatusMessages


class TestStatusMessages:
    """Test cases for the error/success banners."""

    def test_error_stays_until_dismissed(self):
        messages = StatusMessages()

        messages.show_error(RemoteRejected("not found"))

        assert messages.error == "not found"
        assert messages.last_error == RemoteRejected("not found")

        messages.dismiss_error()

        assert messages.error is None
        assert messages.last_error is None

    def test_success_without_loop_stays(self):
        messages = StatusMessages(success_timeout=0.01)

        messages.show_success("Saved")

        assert messages.success == "Saved"

    def test_success_clears_after_timeout(self):
        messages = StatusMessages(success_timeout=0.02)

        async def scenario():
            messages.show_success("Saved")
            await asyncio.sleep(0.05)

        asyncio.run(scenario())

        assert messages.success is None

    def test_newer_success_restarts_timer(self):
        messages = StatusMessages(success_timeout=0.05)

        async def scenario():
            messages.show_success("First")
            await asyncio.sleep(0.03)
            messages.show_success("Second")
            await asyncio.sleep(0.03)
            return messages.success

        assert asyncio.run(scenario()) == "Second"

    def test_close_cancels_timer(self):
        messages = StatusMessages(success_timeout=0.01)

        async def scenario():
            messages.show_success("Saved")
            messages.close()
            await asyncio.sleep(0.03)

        asyncio.run(scenario())

        assert messages.success == "Saved"

    def test_closed_messages_ignore_updates(self):
        messages = StatusMessages(success_timeout=0.01)
        messages.close()

        async def scenario():
            messages.show_success("Late")
            messages.show_error(RemoteRejected("late"))
            return messages._timer

        assert asyncio.run(scenario()) is None
        assert messages.success is None
        assert messages.error is None
