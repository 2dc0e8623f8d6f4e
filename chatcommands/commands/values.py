"""Result of validating a single argument."""

from dataclasses import dataclass
from typing import Any, Optional

from ..errors import InvalidArgumentError


@dataclass(frozen=True)
class ArgumentValue:
    """Either the resolved value of an argument or the error that rejected it."""

    success: bool
    value: Any = None
    error: Optional[InvalidArgumentError] = None

    @classmethod
    def of(cls, value: Any) -> "ArgumentValue":
        if isinstance(value, InvalidArgumentError):
            return cls(success=False, error=value)
        return cls(success=True, value=value)
