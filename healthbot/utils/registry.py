"""
Registry module holding the long-lived services built at startup
(store, WhatsApp client, outbreak services, scheduler, router)
"""
from typing import Any, Dict
import threading

class ServiceNotRegistered(KeyError):
    pass

class Registry:
    """
    A thread-safe singleton registry for storing and retrieving service instances
    """
    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super(Registry, cls).__new__(cls)
                cls._instance._services = {}
        return cls._instance

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._services[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._services.get(key, default)

    def require(self, key: str) -> Any:
        """Get a service, raising if startup has not registered it"""
        with self._lock:
            if key not in self._services:
                raise ServiceNotRegistered(f"Service '{key}' is not registered")
            return self._services[key]

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._services

    def clear(self) -> None:
        with self._lock:
            self._services.clear()

    def snapshot(self) -> Dict[str, str]:
        """Registered service names mapped to their class names"""
        with self._lock:
            return {key: type(value).__name__ for key, value in self._services.items()}

registry = Registry()
