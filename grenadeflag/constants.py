from __future__ import annotations

# ==============================================================================
# Flag Identity
# ==============================================================================

GRENADE_FLAG_ABBREV = "GN"
GRENADE_FLAG_NAME = "Grenade"
GRENADE_FLAG_HELP = "First shot fires the grenade, second shot detonates."

PLUGIN_NAME = "Grenade Flag"

# ==============================================================================
# Server Shot Kinds
# ==============================================================================

# Visible side shots that trail the logical grenade (phantom zone shots).
SIDE_SHOT_KIND = "PZ"

# Blast spawned at the detonation point (shockwave).
BLAST_SHOT_KIND = "SW"

# ==============================================================================
# Variable Names
# ==============================================================================

# Ambient ballistics owned by the host.
VAR_SHOT_SPEED = "_shotSpeed"
VAR_SHOT_RANGE = "_shotRange"
VAR_MUZZLE_FRONT = "_muzzleFront"
VAR_MUZZLE_HEIGHT = "_muzzleHeight"

# Tunables registered by the plugin.
VAR_GRENADE_SPEED_FACTOR = "_grenadeSpeedFactor"
VAR_GRENADE_VERTICAL_VELOCITY = "_grenadeVerticalVelocity"
VAR_GRENADE_WIDTH = "_grenadeWidth"
VAR_GRENADE_ACCURACY = "_grenadeAccuracy"

# ==============================================================================
# Ballistics
# ==============================================================================

# Projected z at or below this height means the grenade hit the ground.
GROUND_LEVEL_Z = 0.0
