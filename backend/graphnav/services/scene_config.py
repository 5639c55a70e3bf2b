"""Static scene constants: graph generation, layout physics, camera motion.

Values mirror what the browser viewer renders with. Layout constants can be
overridden from the environment via ``layout_config_from_env``.
"""

from __future__ import annotations

import logging
import os

from pydantic import ValidationError

from graphnav.models.scene_models import LayoutConfig

logger = logging.getLogger(__name__)

# Graph generation
NODE_COUNT = 13
NODE_SPREAD_RADIUS = 10.0
CONNECTION_PROBABILITY = 0.3

RANDOM_LABELS: tuple[str, ...] = (
    "Alpha", "Beta", "Gamma", "Delta", "Epsilon", "Zeta", "Eta", "Theta",
    "Iota", "Kappa", "Lambda", "Mu", "Nu", "Xi", "Omicron", "Pi",
    "Rho", "Sigma", "Tau", "Upsilon", "Phi", "Chi", "Psi", "Omega",
)

# Label of the single node shown when no graph could be loaded
DEFAULT_LABEL = "Home"

# Hardcoded graph served at /api/graph and used by the "default" source.
# The first node is the start node and the layout anchor.
DEFAULT_GRAPH: dict[str, list] = {
    "nodes": [
        "Home", "Projects", "Reading", "Music", "Travel", "Ideas",
        "Work", "Health", "Recipes", "Garden", "Archive",
    ],
    "connections": [
        ["Home", "Projects"],
        ["Home", "Reading"],
        ["Home", "Music"],
        ["Home", "Ideas"],
        ["Projects", "Work"],
        ["Projects", "Ideas"],
        ["Reading", "Ideas"],
        ["Music", "Travel"],
        ["Travel", "Recipes"],
        ["Health", "Recipes"],
        ["Health", "Garden"],
        ["Recipes", "Garden"],
        ["Work", "Archive"],
    ],
}

# Camera (seconds)
CAMERA_HEIGHT = 10.0
NODE_TRANSITION_DURATION = 1.0
ROTATION_TRANSITION_DURATION = 0.5
ORBIT_DISTANCE_FACTOR = 0.75
LOOK_AT_CURRENT_BIAS = 0.3

# Driving loop
DEFAULT_TICK = 0.016


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def layout_config_from_env() -> LayoutConfig:
    """Build LayoutConfig from GRAPHNAV_LAYOUT_* environment variables."""
    defaults = LayoutConfig()
    try:
        return LayoutConfig(
            repulsion=_float_env("GRAPHNAV_LAYOUT_REPULSION", defaults.repulsion),
            spring=_float_env("GRAPHNAV_LAYOUT_SPRING", defaults.spring),
            centering=_float_env("GRAPHNAV_LAYOUT_CENTERING", defaults.centering),
            damping=_float_env("GRAPHNAV_LAYOUT_DAMPING", defaults.damping),
            min_distance=_float_env("GRAPHNAV_LAYOUT_MIN_DISTANCE", defaults.min_distance),
            jitter=defaults.jitter,
            anchor_height=defaults.anchor_height,
        )
    except ValidationError as e:
        logger.warning("Invalid layout configuration, using defaults: %s", e)
        return defaults
