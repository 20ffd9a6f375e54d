from __future__ import annotations

from typing import Dict, Iterable, Optional, Type

from .check import Check


class CheckRegistry:
    def __init__(self):
        self._checks: Dict[str, Type[Check]] = {}

    def register(self, check_cls: Type[Check]) -> None:
        check_id = getattr(check_cls, "check_id", None)
        if not check_id:
            raise ValueError("Check class missing check_id")
        if check_id in self._checks:
            raise ValueError(f"Duplicate check_id registered: {check_id}")
        self._checks[check_id] = check_cls

    def create_all(self, *, suite: Optional[str] = None) -> list[Check]:
        return [cls() for cls in self._checks.values() if suite is None or cls.suite == suite]

    def get(self, check_id: str) -> Type[Check]:
        return self._checks[check_id]

    def ids(self) -> Iterable[str]:
        return self._checks.keys()


registry = CheckRegistry()


def register_check(check_cls: Type[Check]) -> Type[Check]:
    registry.register(check_cls)
    return check_cls
