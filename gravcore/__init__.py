"""Exact pairwise N-body gravity core with collision fusion and bounded trails."""

from .data_models import Body
from .errors import ConfigurationError, GravityError, PreconditionError
from .vector_utils import Vec3
from .world import World

__all__ = ["Body", "World", "Vec3", "GravityError", "PreconditionError", "ConfigurationError"]
