"""
Dependency Injection Container.

The view layer resolves the engine and auth flow from here instead of
reaching for module-level globals.
"""

import logging
from datetime import timedelta
from typing import Any, Callable, Dict, Type


logger = logging.getLogger(__name__)


class DIContainer:
    """
    Simple dependency injection container.

    Supports:
    - Service registration with factory functions
    - Singleton pattern for shared instances
    - Clear error messages for missing services

    Examples:
        >>> container = DIContainer()
        >>> container.register(Config, lambda: Config(), singleton=True)
        >>> config = container.resolve(Config)
    """

    def __init__(self):
        self._services: Dict[Type, Callable] = {}
        self._singletons: Dict[Type, Any] = {}
        self._singleton_flags: Dict[Type, bool] = {}

    def register(
        self,
        interface: Type,
        implementation: Callable,
        singleton: bool = False
    ):
        """
        Register a service in the container.

        Args:
            interface: Service interface or type
            implementation: Factory function that creates the service
            singleton: Whether to create a single shared instance
        """
        self._services[interface] = implementation
        self._singleton_flags[interface] = singleton
        self._singletons.pop(interface, None)

        logger.debug(
            f"Registered service: {interface.__name__} "
            f"(singleton={singleton})"
        )

    def resolve(self, interface: Type) -> Any:
        """
        Resolve a service from the container.

        Raises:
            ValueError: If service is not registered
        """
        if interface not in self._services:
            raise ValueError(
                f"Service not registered: {interface.__name__}. "
                f"Available services: {', '.join(self.get_registered_services())}"
            )

        if self._singleton_flags.get(interface, False):
            if interface not in self._singletons:
                logger.debug(f"Creating singleton instance: {interface.__name__}")
                self._singletons[interface] = self._services[interface]()
            return self._singletons[interface]

        return self._services[interface]()

    def is_registered(self, interface: Type) -> bool:
        return interface in self._services

    def clear(self):
        self._services.clear()
        self._singletons.clear()
        self._singleton_flags.clear()

    def get_registered_services(self) -> list:
        return [service.__name__ for service in self._services.keys()]


def configure_default_services(container: DIContainer, app_config=None):
    """
    Wire the course admin client.

    Everything is a singleton so the CLI, the auth flow and the engine
    share one HTTP client, one store and one collection.

    Args:
        container: DI container to configure
        app_config: Config to use (the module-level ``config`` if omitted)
    """
    from ..resilience.circuit_breaker import CircuitBreaker
    from ..errors import RemoteConnectionError
    from ..service.http import HttpCourseService
    from ..service.interfaces import AsyncCourseService, CourseService
    from ..service.threaded import ThreadedCourseService
    from ..session.auth import AuthFlow
    from ..session.store import FileSessionStore, SessionStore
    from ..sync.engine import CourseSyncEngine
    from .config import Config, config
    from .logger import setup_logger

    cfg = app_config or config

    container.register(Config, lambda: cfg, singleton=True)

    container.register(
        logging.Logger,
        lambda: setup_logger(
            "course_admin",
            level=getattr(logging, cfg.log_level, logging.INFO),
            log_file=cfg.log_file
        ),
        singleton=True
    )

    container.register(
        SessionStore,
        lambda: FileSessionStore(cfg.session_file),
        singleton=True
    )

    container.register(
        CourseService,
        lambda: HttpCourseService(
            cfg.api_url,
            suffix=cfg.api_suffix,
            timeout=cfg.api_timeout,
            circuit_breaker=CircuitBreaker(
                failure_threshold=cfg.circuit_threshold,
                timeout=timedelta(seconds=cfg.circuit_reset_seconds),
                expected_exception=RemoteConnectionError
            )
        ),
        singleton=True
    )

    container.register(
        AsyncCourseService,
        lambda: ThreadedCourseService(container.resolve(CourseService)),
        singleton=True
    )

    container.register(
        AuthFlow,
        lambda: AuthFlow(
            container.resolve(AsyncCourseService),
            container.resolve(SessionStore)
        ),
        singleton=True
    )

    container.register(
        CourseSyncEngine,
        lambda: CourseSyncEngine(
            container.resolve(AsyncCourseService),
            container.resolve(AuthFlow),
            success_timeout=cfg.success_message_seconds
        ),
        singleton=True
    )

    logger.debug("Default services configured")
