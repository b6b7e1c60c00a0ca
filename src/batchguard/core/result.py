"""
Result envelope for verifier outcomes.

Every verifier returns ``Result[T]``: ``Ok(value)`` when the attribute value is
acceptable (the value may be a rewritten, expanded or normalized form of the
input) or ``Err(error)`` carrying a :class:`~batchguard.core.errors.VerificationError`.

Returning the new value instead of mutating the attribute means the caller
swaps old for new only on success; a failed verifier leaves the attribute
untouched.

Manifesto:
    - **Explicit over Implicit:** No hidden exceptions that callers might miss
    - **Atomic rewrite:** The caller replaces the value only on ``Ok``
    - **Short-circuit composition:** ``flat_map`` stops at the first ``Err``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T]                                │
        ├─────────────────────────────┬───────────────────────────────┤
        │     Ok[T]                   │     Err[T]                    │
        │ • value: T                  │ • error: Exception            │
        │ • map() / flat_map()        │ • map_err()                   │
        │ • unwrap()                  │ • unwrap() raises             │
        └─────────────────────────────┴───────────────────────────────┘

Examples:
    >>> from batchguard.core.result import Ok, Err
    >>> Ok("oe").map(str.upper).unwrap()
    'OE'
    >>> Err(ValueError("bad")).unwrap_or("n")
    'n'

    Pattern matching:

    >>> match Ok(3):
    ...     case Ok(value):
    ...         print(value)
    ...     case Err(error):
    ...         print(error)
    3

Guardrails:
    ❌ DON'T: Use unwrap() without checking is_ok() first
    ✅ DO: Use pattern matching or unwrap_or()

Tags:
    result-pattern, error-handling, batchguard

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from batchguard.core.errors import VerificationError


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    For verifiers the value is the (possibly rewritten) attribute value.
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get value or default (always returns value for Ok)."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform error if Err (no-op for Ok)."""
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    Verifiers always put a ``VerificationError`` here; other exceptions are
    tolerated by ``to_dict`` so foreign callables can share the envelope.
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        """Get default since this is Err."""
        return default

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the error."""
        return Err(f(self.error))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if isinstance(self.error, VerificationError):
            return {"ok": False, "error": self.error.to_dict()}
        return {
            "ok": False,
            "error": {
                "error_type": type(self.error).__name__,
                "message": str(self.error),
            },
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Ok[T] | Err[T]
