"""
Asyncio adapter over a blocking CourseService.

Each call runs on a worker thread via ``asyncio.to_thread`` so the event
loop keeps serving other intents while a request is outstanding.
"""

import asyncio
from typing import Any, Dict, Optional

from .interfaces import AsyncCourseService, CourseService


class ThreadedCourseService(AsyncCourseService):
    """
    Examples:
        >>> service = ThreadedCourseService(HttpCourseService(config.api_url))
        >>> payload = await service.list_courses()
    """

    def __init__(self, service: CourseService):
        self.service = service

    def set_token(self, token: Optional[str]):
        self.service.set_token(token)

    async def login(self, email: str, password: str) -> Any:
        return await asyncio.to_thread(self.service.login, email, password)

    async def register(self, name: str, email: str, password: str) -> Any:
        return await asyncio.to_thread(self.service.register, name, email, password)

    async def list_courses(self) -> Any:
        return await asyncio.to_thread(self.service.list_courses)

    async def create_course(self, payload: Dict[str, Any]) -> Any:
        return await asyncio.to_thread(self.service.create_course, payload)

    async def update_course(self, payload: Dict[str, Any]) -> Any:
        return await asyncio.to_thread(self.service.update_course, payload)

    async def delete_course(self, course_id: int) -> Any:
        return await asyncio.to_thread(self.service.delete_course, course_id)
