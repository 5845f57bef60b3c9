"""Dependency injection container.

Ports are bound to factories and resolved on demand, so tests can swap
the booking API for fakes without touching the services. A binding is
either shared (one instance per container) or transient (a new
instance on every resolve).
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config

Factory = Callable[[], Any]


@dataclass
class _Binding:
    factory: Factory
    shared: bool
    instance: Any = None
    created: bool = False

    def get(self) -> Any:
        if not self.shared:
            return self.factory()
        if not self.created:
            self.instance = self.factory()
            self.created = True
        return self.instance


@dataclass
class Container:
    """Port-to-factory bindings for one application.

    Usage:
        container = Container.create_default()
        session = container.resolve(SearchSession)

        # Swap the remote search for a fake
        container.register(ScheduleQueryPort, lambda: FakeSchedule())

    Attributes:
        config: Application configuration the default bindings read
    """

    config: AppConfig = field(default_factory=get_config)

    _bindings: Dict[type[Any], _Binding] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(self, port_type: type[Any], factory: Factory, singleton: bool = True) -> None:
        """Bind ``port_type`` to ``factory``, replacing any earlier binding.

        Args:
            port_type: Usually a Protocol or a concrete service class.
            factory: Zero-argument callable building the instance.
            singleton: Share one instance instead of building per resolve.
        """
        with self._lock:
            self._bindings[port_type] = _Binding(factory, shared=singleton)

    def resolve(self, port_type: type[Any]) -> Any:
        """Instance bound to ``port_type``.

        Raises:
            KeyError: If nothing is bound to the type.
        """
        with self._lock:
            binding = self._bindings.get(port_type)
            if binding is None:
                raise KeyError(f"Type not registered: {port_type}")
            return binding.get()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._bindings

    def clear_all(self) -> None:
        with self._lock:
            self._bindings.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        The LocationService is a singleton (one index per process); each
        resolve of SearchSession returns a new session sharing it.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.api import ApiLocationDirectory, ApiScheduleQuery, BookingApiClient
        from .adapters.cache import InMemoryCache
        from .adapters.transliteration import AsciiFoldTransliterator, PinyinTransliterator
        from .ports.cache import CachePort
        from .ports.directory import LocationDirectoryPort
        from .ports.schedule import ScheduleQueryPort
        from .ports.transliteration import TransliteratorPort
        from .services import LocationService, SearchSession

        config = config or get_config()
        container = cls(config=config)

        client = BookingApiClient(config.api)
        cache: InMemoryCache[Any] = InMemoryCache(
            name="directory", default_ttl_seconds=config.index.groups_ttl_seconds
        )
        container.register(CachePort, lambda: cache)
        container.register(BookingApiClient, lambda: client)

        def create_transliterator() -> TransliteratorPort:
            if config.index.transliteration == "ascii_fold":
                return AsciiFoldTransliterator()
            return PinyinTransliterator()

        container.register(TransliteratorPort, create_transliterator)
        container.register(
            LocationDirectoryPort,
            lambda: ApiLocationDirectory(container.resolve(BookingApiClient)),
        )
        container.register(
            ScheduleQueryPort,
            lambda: ApiScheduleQuery(container.resolve(BookingApiClient)),
        )

        def create_location_service() -> LocationService:
            return LocationService(
                directory=container.resolve(LocationDirectoryPort),
                transliterator=container.resolve(TransliteratorPort),
                cache=container.resolve(CachePort),
                marker=config.index.station_marker,
                suggestion_limit=config.index.suggestion_limit,
                fuzzy_min_score=config.index.fuzzy_min_score,
            )

        container.register(LocationService, create_location_service)

        def create_search_session() -> SearchSession:
            return SearchSession(
                schedule=container.resolve(ScheduleQueryPort),
                locations=container.resolve(LocationService),
                config=config.search,
            )

        container.register(SearchSession, create_search_session, singleton=False)

        return container
