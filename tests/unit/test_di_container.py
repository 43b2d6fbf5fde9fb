"""
Unit tests for the DI container and default wiring.
"""

import pytest

from course_admin.service.http import HttpCourseService
from course_admin.service.interfaces import AsyncCourseService, CourseService
from course_admin.service.threaded import ThreadedCourseService
from course_admin.session.auth import AuthFlow
from course_admin.session.store import FileSessionStore, SessionStore
from course_admin.sync.engine import CourseSyncEngine
from course_admin.utils.config import Config
from course_admin.utils.di_container import DIContainer, configure_default_services


class Greeter:
    pass


class TestDIContainer:
    """Test cases for DIContainer."""

    def test_transient_registration(self):
        container = DIContainer()
        container.register(Greeter, Greeter)

        assert container.resolve(Greeter) is not container.resolve(Greeter)

    def test_singleton_registration(self):
        container = DIContainer()
        container.register(Greeter, Greeter, singleton=True)

        assert container.resolve(Greeter) is container.resolve(Greeter)

    def test_reregistration_drops_cached_singleton(self):
        container = DIContainer()
        container.register(Greeter, Greeter, singleton=True)
        first = container.resolve(Greeter)

        container.register(Greeter, Greeter, singleton=True)

        assert container.resolve(Greeter) is not first

    def test_unregistered_service(self):
        container = DIContainer()
        container.register(Greeter, Greeter)

        with pytest.raises(ValueError, match="Service not registered: Config"):
            container.resolve(Config)

    def test_clear(self):
        container = DIContainer()
        container.register(Greeter, Greeter)

        container.clear()

        assert not container.is_registered(Greeter)
        assert container.get_registered_services() == []


class TestDefaultServices:
    """Test cases for configure_default_services."""

    @pytest.fixture
    def container(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COURSE_API_URL", "https://api.example.com/BACKEND/")
        monkeypatch.setenv("COURSE_API_SUFFIX", ".php")
        monkeypatch.setenv("COURSE_SESSION_FILE", str(tmp_path / "session.json"))
        monkeypatch.setenv("COURSE_SUCCESS_MESSAGE_SECONDS", "5")
        container = DIContainer()
        configure_default_services(container, Config())
        return container

    def test_wiring(self, container):
        engine = container.resolve(CourseSyncEngine)
        auth = container.resolve(AuthFlow)
        service = container.resolve(AsyncCourseService)

        assert engine.auth is auth
        assert engine.service is service
        assert auth.service is service
        assert isinstance(service, ThreadedCourseService)
        assert service.service is container.resolve(CourseService)
        assert engine.messages.success_timeout == 5.0

    def test_http_service_uses_config(self, container):
        http = container.resolve(CourseService)

        assert isinstance(http, HttpCourseService)
        assert http.url_for("/courses") == "https://api.example.com/BACKEND/courses.php"

    def test_file_store(self, container, tmp_path):
        store = container.resolve(SessionStore)

        assert isinstance(store, FileSessionStore)
        assert store.filepath == tmp_path / "session.json"
