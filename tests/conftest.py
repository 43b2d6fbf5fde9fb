"""
Shared fixtures: an in-memory async course service and wired-up auth flow.
"""

import json

import pytest

from course_admin.models.session import TOKEN_KEY, USER_KEY
from course_admin.service.interfaces import AsyncCourseService
from course_admin.session.auth import AuthFlow
from course_admin.session.store import MemorySessionStore


LOGIN_OK = {
    "success": True,
    "user": {"id": 1, "name": "Ana", "email": "a@b.com"},
    "token": "tok123",
}


class FakeCourseService(AsyncCourseService):
    """
    Scriptable stand-in for the remote service.

    - ``course_lists``: payload per list_courses call (the last one repeats)
    - ``list_gates``: optional asyncio.Event per list_courses call; the call
      waits on it before answering
    - ``gates``: method name -> asyncio.Event awaited before answering
    - ``errors``: method name -> exception raised instead of answering
    """

    def __init__(self):
        self.token = None
        self.calls = []
        self.login_response = dict(LOGIN_OK)
        self.register_response = {"success": True, "message": "Registered"}
        self.course_lists = [[]]
        self.list_gates = []
        self.mutation_responses = {
            "create_course": {"success": True},
            "update_course": {"success": True},
            "delete_course": {"success": True},
        }
        self.gates = {}
        self.errors = {}

    def count(self, method):
        return sum(1 for name, _ in self.calls if name == method)

    def set_token(self, token):
        self.token = token

    async def _answer(self, method, arg, response):
        self.calls.append((method, arg))
        if method in self.gates:
            await self.gates[method].wait()
        if method in self.errors:
            raise self.errors[method]
        return response

    async def login(self, email, password):
        return await self._answer("login", {"email": email, "password": password}, self.login_response)

    async def register(self, name, email, password):
        return await self._answer(
            "register",
            {"name": name, "email": email, "password": password},
            self.register_response
        )

    async def list_courses(self):
        index = self.count("list_courses")
        self.calls.append(("list_courses", None))
        if index < len(self.list_gates) and self.list_gates[index] is not None:
            await self.list_gates[index].wait()
        if "list_courses" in self.errors:
            raise self.errors["list_courses"]
        return self.course_lists[min(index, len(self.course_lists) - 1)]

    async def create_course(self, payload):
        return await self._answer("create_course", payload, self.mutation_responses["create_course"])

    async def update_course(self, payload):
        return await self._answer("update_course", payload, self.mutation_responses["update_course"])

    async def delete_course(self, course_id):
        return await self._answer("delete_course", course_id, self.mutation_responses["delete_course"])


@pytest.fixture
def service():
    return FakeCourseService()


@pytest.fixture
def store():
    return MemorySessionStore()


@pytest.fixture
def auth(service, store):
    return AuthFlow(service, store)


@pytest.fixture
def logged_in_auth(service, store):
    """AuthFlow restored from a stored session, without any service call."""
    store.records[USER_KEY] = json.dumps(
        {"userId": 1, "displayName": "Ana", "email": "a@b.com"}
    )
    store.records[TOKEN_KEY] = "tok123"
    flow = AuthFlow(service, store)
    assert flow.bootstrap() is not None
    return flow
