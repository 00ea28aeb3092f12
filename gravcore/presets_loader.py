#!/usr/bin/env python3
"""
Scene template loading.

Template JSON (gravcore/templates/*.json):
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "step_time": 86400.0,               # optional, default constants.STEP_TIME
  "G": 6.67259e-11,                   # optional, default constants.G
  "position_scale": 1.3e-11,          # optional, world-managed display scale
  "radius_scale": 1.6e-9,             # optional, world-managed display scale
  "trace_num": 200,                   # optional
  "trace_prelocate": 5,               # optional
  "bodies": [
    {
      "name": "Sun",
      "mass": 1.986e30,
      "density": 55130.0,             # optional, default constants.DEFAULT_DENSITY
      "position": [0.0, 0.0, 0.0],
      "velocity": [0.0, 0.0, 0.0],    # optional
      "fixed": true                   # optional
    }
  ]
}

Users can add their own JSON files into the templates folder and they'll be picked up by the loader.
A missing or unparsable file is a ConfigurationError; an individual malformed body
entry is skipped with a warning.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import DEFAULT_DENSITY, G, STEP_TIME, TRACE_NUM, TRACE_PRELOCATE
from .data_models import Body
from .errors import ConfigurationError, GravityError
from .vector_utils import ZERO, vec
from .world import World

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")

logger = logging.getLogger("gravity_sim.presets")


@dataclass
class Template:
  """
  A parsed scene. ``body_specs`` holds the validated body entries; every call to
  make_bodies() or build_world() creates fresh Body objects from them.
  """
  name: str
  description: str = ""
  step_time: float = STEP_TIME
  G: float = G
  position_scale: Optional[float] = None
  radius_scale: Optional[float] = None
  trace_num: int = TRACE_NUM
  trace_prelocate: int = TRACE_PRELOCATE
  body_specs: List[dict] = field(default_factory=list)

  def make_bodies(self) -> List[Body]:
    return [body_from_dict(b, self.trace_num, self.trace_prelocate) for b in self.body_specs]

  def build_world(self) -> World:
    world = World(self.step_time, G=self.G, position_scale=self.position_scale, radius_scale=self.radius_scale)
    for b in self.make_bodies():
      world.add_body(b)
    return world


def _read_json(path: str) -> dict:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as e:
    raise ConfigurationError(f"cannot read template {path}: {e}") from e
  if not isinstance(data, dict):
    raise ConfigurationError(f"template {path} must contain a JSON object")
  return data


def _optional_float(data: dict, key: str) -> Optional[float]:
  value = data.get(key)
  if value is None:
    return None
  if isinstance(value, bool) or not isinstance(value, (int, float)):
    raise ConfigurationError(f"{key} must be a number, got {value!r}")
  return float(value)


def list_templates(templates_dir: str = TEMPLATES_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available templates."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(templates_dir):
    return items
  for fn in sorted(os.listdir(templates_dir)):
    if not fn.lower().endswith(".json"):
      continue
    try:
      data = _read_json(os.path.join(templates_dir, fn))
    except ConfigurationError as e:
      logger.warning("Skipping template %s: %s", fn, e)
      continue
    items.append((fn, data.get("name") or os.path.splitext(fn)[0]))
  return items


def body_from_dict(b: dict, trace_num: int = TRACE_NUM, trace_prelocate: int = TRACE_PRELOCATE) -> Body:
  fixed = b.get("fixed", False)
  if not isinstance(fixed, bool):
    raise ConfigurationError(f"fixed must be true or false, got {fixed!r}")
  return Body(
    mass=float(b["mass"]),
    density=float(b.get("density", DEFAULT_DENSITY)),
    position=vec(b["position"]),
    velocity=vec(b.get("velocity", ZERO)),
    fixed=fixed,
    trace_num=trace_num,
    trace_prelocate=trace_prelocate,
    name=b.get("name"),
  )


def load_template(file_name: str, templates_dir: str = TEMPLATES_DIR, trace_num: Optional[int] = None) -> Template:
  """
  Load a template JSON by file name (or absolute path).
  ``trace_num`` overrides the trail length stored in the file.
  """
  path = file_name if os.path.isabs(file_name) else os.path.join(templates_dir, file_name)
  data = _read_json(path)
  try:
    template = Template(
      name=data.get("name") or os.path.splitext(os.path.basename(file_name))[0],
      description=data.get("description", ""),
      step_time=float(data.get("step_time", STEP_TIME)),
      G=float(data.get("G", G)),
      position_scale=_optional_float(data, "position_scale"),
      radius_scale=_optional_float(data, "radius_scale"),
      trace_num=int(trace_num if trace_num is not None else data.get("trace_num", TRACE_NUM)),
      trace_prelocate=int(data.get("trace_prelocate", TRACE_PRELOCATE)),
    )
  except (TypeError, ValueError) as e:
    raise ConfigurationError(f"invalid settings in template {path}: {e}") from e
  if template.trace_num < 1 or template.trace_prelocate < 1:
    raise ConfigurationError(f"trace_num and trace_prelocate must be >= 1 in template {path}")
  for label in ("position_scale", "radius_scale"):
    value = getattr(template, label)
    if value is not None and not value > 0:
      raise ConfigurationError(f"{label} must be positive in template {path}, got {value!r}")

  for i, b in enumerate(data.get("bodies", [])):
    try:
      body_from_dict(b, template.trace_num, template.trace_prelocate)
    except (KeyError, TypeError, ValueError, GravityError) as e:
      logger.warning("Skipping body #%d in %s: %r", i, os.path.basename(path), e)
      continue
    template.body_specs.append(b)
  return template


def load_world(file_name: str, templates_dir: str = TEMPLATES_DIR, trace_num: Optional[int] = None) -> World:
  return load_template(file_name, templates_dir, trace_num).build_world()
