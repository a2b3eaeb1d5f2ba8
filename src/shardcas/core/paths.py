"""Centralized path management for shardcas.

All default locations used by shardcas are defined here.
"""

from pathlib import Path

# Base directory
SHARDCAS_HOME = Path.home() / ".shardcas"

# Configuration file
CONFIG_FILE = SHARDCAS_HOME / "config.yaml"

# Default object store root
DEFAULT_STORE_ROOT = SHARDCAS_HOME / "objects"
