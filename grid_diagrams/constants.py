# grid_diagrams/constants.py
"""
Grid Diagram Constants

This module defines constants shared across the package:

MOVES
- MIN_DESTABILIZE_SIZE: a diagram must be strictly larger than this to shrink

ENERGY
- HASH_MULTIPLIER: polynomial multiplier for Energy hashes

REGISTRY / ENVIRONMENT
- DEFAULT_REGISTRY_FILE: file name of the JSON link registry
- REGISTRY_ENV_VAR: environment variable holding the registry path
- LOG_LEVEL_ENV_VAR: environment variable holding the package log level
"""


# =============================================================================
# MOVES
# =============================================================================

# The 2x2 unknot is the smallest grid diagram
MIN_DESTABILIZE_SIZE = 2


# =============================================================================
# ENERGY
# =============================================================================

HASH_MULTIPLIER = 31


# =============================================================================
# REGISTRY / ENVIRONMENT
# =============================================================================

DEFAULT_REGISTRY_FILE = "grids.json"
REGISTRY_ENV_VAR = "GRID_DIAGRAMS_REGISTRY"
LOG_LEVEL_ENV_VAR = "GRID_DIAGRAMS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
