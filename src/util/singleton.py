import threading


class Singleton(type):
    """Hands out one shared instance per class, created lazily on first use."""

    _instances: dict[type, object] = {}
    _lock = threading.Lock()

    def __call__(cls, *args, **kwargs):
        with cls._lock:
            if cls not in cls._instances:
                cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]

    def reset_instance(cls):
        # the next call builds a fresh instance, e.g. after the environment changed
        with cls._lock:
            cls._instances.pop(cls, None)
