"""
World-side helpers for placing compiled voxels.

These are pure calculations; building the world itself is left to the
renderer. ``compute_spawn_plan()`` finds a small platform just before the
first column of voxels, wide enough to span every lane, so a player starts
looking down the pattern.
"""

import dataclasses
import math
import typing

import voxelseq.config
import voxelseq.events
import voxelseq.voxel_mapper


PLATFORM_GAP = 4
PLATFORM_DEPTH = 3
LANE_MARGIN = 2
EYE_HEIGHT = 2.0


@dataclasses.dataclass(frozen=True)
class SpawnPlan:

	"""
	An inclusive rectangle of platform blocks and the player start position.
	"""

	x_start: int
	x_end: int
	z_start: int
	z_end: int
	platform_y: int
	player_position: typing.Tuple[float, float, float]


def compute_spawn_plan (voxels: typing.Sequence[voxelseq.voxel_mapper.Voxel], mapping: typing.Optional[voxelseq.config.MappingConfig] = None) -> typing.Optional[SpawnPlan]:

	"""
	Plan a spawn platform for a set of voxels, or None when there are none.

	The platform sits one block below the lowest voxel (but never below
	``base_height - 1``) and spans all lanes with a margin on each side.
	"""

	if not voxels:
		return None

	mapping = mapping or voxelseq.config.MappingConfig()

	min_x = min(voxel.x for voxel in voxels)
	min_y = min(voxel.y for voxel in voxels)
	min_z = min(voxel.z for voxel in voxels)
	max_z = max(voxel.z for voxel in voxels)

	x_start = math.floor(min_x) - PLATFORM_GAP
	x_end = x_start + PLATFORM_DEPTH
	platform_y = max(voxelseq.events.round_half_up(min_y) - 1, mapping.base_height - 1)
	z_start = math.floor(min_z) - LANE_MARGIN
	z_end = math.ceil(max_z) + LANE_MARGIN

	player_position = (
		(x_start + x_end) / 2,
		platform_y + EYE_HEIGHT,
		(z_start + z_end) / 2,
	)

	return SpawnPlan(
		x_start = x_start,
		x_end = x_end,
		z_start = z_start,
		z_end = z_end,
		platform_y = platform_y,
		player_position = player_position
	)


def platform_blocks (plan: SpawnPlan) -> typing.List[typing.Tuple[int, int, int]]:

	"""
	List every block position of the platform, x-major.
	"""

	return [
		(x, plan.platform_y, z)
		for x in range(plan.x_start, plan.x_end + 1)
		for z in range(plan.z_start, plan.z_end + 1)
	]


def colour_for (instrument: str, mapping: typing.Optional[voxelseq.config.MappingConfig] = None) -> int:

	"""
	Return the RGB colour (``0xRRGGBB``) used to draw an instrument's voxels.
	"""

	mapping = mapping or voxelseq.config.MappingConfig()

	return mapping.instrument_colours.get(instrument, mapping.default_colour)
