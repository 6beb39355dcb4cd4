"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
For configurable values, see models.py.
"""

# =============================================================================
# Scheduler Output
# =============================================================================

SYSTEM_TIMEZONE = "system"
"""Timezone marker for schedules that inherit the scheduler host's zone."""

TRIGGER_TBD = "TBD"
"""Trigger marker emitted for jobs whose trigger must be written by hand."""

DEFAULT_JOB_GROUP = "migrated-timers"
"""Job group for generated job identities."""

# =============================================================================
# Engine Limits
# =============================================================================

MAX_WORKERS_LIMIT = 64
"""Hard cap for the classification worker pool."""

# =============================================================================
# Files
# =============================================================================

CONFIG_DIR_NAME = ".cronshift"
CONFIG_FILE_NAME = "config.yaml"
