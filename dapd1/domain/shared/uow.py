from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Type


class UoW(ABC):
    """A transaction boundary. Commits on clean exit, rolls back on error."""

    @abstractmethod
    def begin(self) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...

    def __enter__(self) -> "UoW":
        self.begin()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]] = None,
        exc: Optional[BaseException] = None,
        tb: Optional[TracebackType] = None,
    ) -> None:
        self.rollback() if exc else self.commit()
