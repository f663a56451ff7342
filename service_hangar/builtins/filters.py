"""Message filter contract and the regular expression filter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
import re
from typing import Any, Iterable

from ..domain.exceptions import ValidationError
from ..logging_config import get_logger

logger = get_logger(__name__)


class FilterResult(str, Enum):
    """Outcome of applying a filter to a message."""

    ACCEPT = "ACCEPT"
    NEUTRAL = "NEUTRAL"
    DENY = "DENY"


class MessageFilter(ABC):
    """Decides whether a message passes."""

    __service_group__ = "service_hangar.filters"

    def __init__(self, on_match: FilterResult = FilterResult.NEUTRAL, on_mismatch: FilterResult = FilterResult.DENY):
        self.on_match = FilterResult(on_match)
        self.on_mismatch = FilterResult(on_mismatch)

    @abstractmethod
    def filter(self, message: Any, *params: Any) -> FilterResult:
        """Apply the filter to a message."""


def to_pattern_flags(names: Iterable[str] | None) -> int:
    """Combine re flag names (e.g. "IGNORECASE") into a flags value.

    Unknown names are ignored.
    """
    flags = 0
    for name in names or ():
        flag = getattr(re, str(name).upper(), None)
        if isinstance(flag, re.RegexFlag):
            flags |= flag
        else:
            logger.debug("unknown_pattern_flag", flag=name)
    return flags


class RegexFilter(MessageFilter):
    """Matches the whole message against a regular expression.

    With use_raw_message the pattern is applied to the unformatted
    template; otherwise positional params are substituted into "{}"
    placeholders first.
    """

    def __init__(
        self,
        regex: str | None = None,
        pattern_flags: Iterable[str] = (),
        use_raw_message: bool = False,
        on_match: FilterResult = FilterResult.NEUTRAL,
        on_mismatch: FilterResult = FilterResult.DENY,
    ):
        if regex is None:
            raise ValidationError("A regular expression must be provided for RegexFilter", field="regex")
        super().__init__(on_match, on_mismatch)
        try:
            self.pattern = re.compile(regex, to_pattern_flags(pattern_flags))
        except re.error as e:
            raise ValidationError(f"Invalid regular expression: {e}", field="regex", value=regex) from e
        self.use_raw_message = use_raw_message

    def filter(self, message: Any, *params: Any) -> FilterResult:
        if message is None:
            return self.on_mismatch
        text = str(message)
        if params and not self.use_raw_message:
            text = _format_params(text, params)
        return self.on_match if self.pattern.fullmatch(text) else self.on_mismatch

    def __repr__(self) -> str:
        return f"RegexFilter(use_raw={self.use_raw_message}, pattern={self.pattern.pattern!r})"


def _format_params(template: str, params: tuple[Any, ...]) -> str:
    parts = template.split("{}")
    out = [parts[0]]
    for i, part in enumerate(parts[1:]):
        out.append(str(params[i]) if i < len(params) else "{}")
        out.append(part)
    return "".join(out)
