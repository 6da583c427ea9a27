"""Plan student semesters, subjects and subject attempts, as a library or over HTTP."""

__version__ = "0.1.0"