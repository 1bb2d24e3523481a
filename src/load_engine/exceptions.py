"""Exception hierarchy for the training load engine.

Pure calculations only ever raise ``InvalidInputError``. Degenerate input
(empty streams, zero HR range, zero variance) is not an error and yields a
sentinel value instead. I/O failures surface as ``UpstreamUnavailableError``
subclasses from the orchestration layer.
"""

from __future__ import annotations


class LoadEngineError(Exception):
    """Base exception for all load_engine errors."""


class InvalidInputError(LoadEngineError, ValueError):
    """Input has the wrong shape (e.g. zone buckets != 5)."""


class UpstreamUnavailableError(LoadEngineError):
    """A collaborator (activity source or store) could not be reached."""


class PersistenceError(UpstreamUnavailableError):
    """A read or write against the load store failed."""


class ActivitySourceError(UpstreamUnavailableError):
    """Activity streams or metadata could not be fetched."""
