#!/usr/bin/env python3
"""
Error types raised by the simulation core.

Every error reflects a misuse of the API by the caller and is raised at the
call that triggered it. The core never retries or recovers locally.
"""


class GravityError(Exception):
    """Base class for all simulation core errors."""


class PreconditionError(GravityError, ValueError):
    """A physical precondition was violated (bad mass, coincident bodies, ...)."""


class ConfigurationError(GravityError, ValueError):
    """Invalid configuration supplied at construction or load time."""
