"""
units.py — Layout constants.

This is the foundation module. The overlap resolver and the strategies read
their fixed limits from here. Never hardcode these values anywhere else.

All distances are canvas pixels.
"""

import math

# =============================================================================
# OVERLAP RESOLUTION LIMITS
# =============================================================================

# Nudge phase: full scans before giving up and falling back to the spiral
MAX_RESOLVE_ITERATIONS = 50

# Spiral force-separation
SPIRAL_ATTEMPTS = 20
SPIRAL_BASE_RADIUS = 50         # Also the fixed minimum distance of the final pass
SPIRAL_RADIUS_STEP = 10


def spiral_offset(attempt: int, min_distance: float = SPIRAL_BASE_RADIUS) -> tuple:
    """Offset (dx, dy) of the given spiral attempt from the anchor centre."""
    angle = 2 * math.pi * attempt / SPIRAL_ATTEMPTS
    radius = min_distance + attempt * SPIRAL_RADIUS_STEP
    return (radius * math.cos(angle), radius * math.sin(angle))


# =============================================================================
# STRATEGY GEOMETRY
# =============================================================================

# Comparison columns: horizontal centre as a fraction of canvas width
COMPARISON_LEFT_CENTER = 0.25
COMPARISON_RIGHT_CENTER = 0.75

# Cycle: first node at the top, then clockwise (screen y grows downwards)
CYCLE_START_ANGLE_DEG = 270

# =============================================================================
# PERFORMANCE
# =============================================================================

SLOW_LAYOUT_MS = 5000
FAST_LAYOUT_MS = 2000
