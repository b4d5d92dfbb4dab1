"""
Context manager for validation configuration (tracing, message sizes).
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Settings:
    trace: bool = False
    max_repr: int = 80


# Context variable for the active settings
_settings: ContextVar[Settings] = ContextVar("assay_settings", default=Settings())


def current_settings() -> Settings:
    """Return the settings in effect for the current context."""
    return _settings.get()


def is_tracing() -> bool:
    return _settings.get().trace


@contextmanager
def validation_context(*, trace: bool = False, max_repr: int = 80):
    """
    Context manager for validation configuration.

    Args:
        trace: If True, `run` and `run_or_throw` log every failing run at
               DEBUG level on the `assay.core` logger.
        max_repr: Maximum number of characters of an offending value that
                  default predicate messages embed.

    Example:
        from assay import run, string, validation_context

        with validation_context(trace=True):
            run(string, 42)  # logs the TypeMismatch
    """
    if max_repr < 1:
        raise ValueError("max_repr must be positive")
    token = _settings.set(Settings(trace=trace, max_repr=max_repr))
    try:
        yield
    finally:
        _settings.reset(token)
