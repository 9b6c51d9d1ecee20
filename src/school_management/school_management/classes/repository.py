from __future__ import annotations

from typing import Protocol


class ClassRepository(Protocol):
    def exists(self, class_id: str) -> bool:
        raise NotImplementedError
