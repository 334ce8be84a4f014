import threading
from typing import Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class LatestValue(Generic[T]):
    """
    A single-slot mailbox shared by one producer thread and one consumer.
    Publishing replaces the stored value (last write wins); reading never blocks
    and always returns the most recently published value.
    """

    def __init__(self, default: Optional[T] = None) -> None:
        self._lock = threading.Lock()
        self._value: Optional[T] = default
        self._version = 0

    def publish(self, value: T) -> None:
        """
        Replace the stored value.
        """
        with self._lock:
            self._value = value
            self._version += 1

    def latest(self) -> Optional[T]:
        """
        Return the most recently published value (or the default if nothing was published).
        """
        with self._lock:
            return self._value

    def snapshot(self) -> Tuple[Optional[T], int]:
        """
        Return the stored value together with its version.
        The version increases by one with every publish, so a consumer can tell
        whether the value changed since its last read.
        """
        with self._lock:
            return self._value, self._version

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    def __str__(self) -> str:
        value, version = self.snapshot()
        return f"LatestValue(v{version}: {value})"

    def __repr__(self) -> str:
        return str(self)
