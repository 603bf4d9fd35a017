"""
Chalawa - Tagged result values.

Every core operation raises a ChalawaError subclass on failure. Callers
that prefer a value they can inspect or serialize (request handlers,
batch jobs) wrap the call with capture() and receive a Result instead.

Example:
    result = capture(cipher.decrypt, text, password)
    if not result.ok:
        return {"error": result.error.to_dict()}
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .errors import ChalawaError


@dataclass(frozen=True)
class Result:
    """
    Outcome of one operation: a value or a tagged error, never both.

    Attributes:
        value: Return value on success
        error: ChalawaError on failure
    """
    value: Any = None
    error: Optional[ChalawaError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[str]:
        """Error kind name on failure, None on success."""
        return self.error.kind if self.error is not None else None

    @classmethod
    def success(cls, value: Any) -> 'Result':
        return cls(value=value)

    @classmethod
    def failure(cls, error: ChalawaError) -> 'Result':
        return cls(error=error)

    def unwrap(self) -> Any:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {'ok': False, 'error': self.error.to_dict()}
        return {'ok': True, 'value': self.value}


def capture(func: Callable[..., Any], *args, **kwargs) -> Result:
    """
    Call func and convert a ChalawaError into a failed Result.

    Exceptions that are not ChalawaError (programming errors) propagate.
    """
    try:
        return Result.success(func(*args, **kwargs))
    except ChalawaError as e:
        return Result.failure(e)
