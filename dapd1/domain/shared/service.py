from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform(kw_only_default=True)
class _ServiceMeta(type):
    """Makes every Service subclass a keyword-only dataclass.

    Services are wired by name (``VersionChainService(repo=..., uow=...)``),
    so positional construction is refused.
    """

    def __new__(mcs, name: str, bases: tuple, namespace: dict):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            return dataclass(cls, kw_only=True)
        return cls


class Service(metaclass=_ServiceMeta):
    """Base class for domain services over the catalog ports."""
