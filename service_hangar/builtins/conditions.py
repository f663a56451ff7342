"""Path condition contract and the negating condition."""

from __future__ import annotations

from abc import ABC, abstractmethod
import os
from pathlib import Path

from ..domain.exceptions import ValidationError


class PathCondition(ABC):
    """Selects files during a directory tree walk."""

    __service_group__ = "service_hangar.path_conditions"

    @abstractmethod
    def accept(self, base_dir: Path, relative_path: Path, stat: os.stat_result | None = None) -> bool:
        """Whether the file at base_dir / relative_path is selected."""

    def before_tree_walk(self) -> None:
        """Called before each walk so stateful conditions can reset."""


class IfNot(PathCondition):
    """Accepts exactly the paths the wrapped condition rejects."""

    def __init__(self, condition: PathCondition):
        if condition is None:
            raise ValidationError("A condition to negate must be provided", field="condition")
        self.wrapped = condition

    def accept(self, base_dir: Path, relative_path: Path, stat: os.stat_result | None = None) -> bool:
        return not self.wrapped.accept(base_dir, relative_path, stat)

    def before_tree_walk(self) -> None:
        self.wrapped.before_tree_walk()

    def __repr__(self) -> str:
        return f"IfNot({self.wrapped!r})"
