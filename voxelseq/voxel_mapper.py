import dataclasses
import math
import typing

import voxelseq.config
import voxelseq.events


@dataclasses.dataclass(frozen=True)
class Voxel:

	"""
	An integer lattice position standing for one event.
	"""

	x: int
	y: int
	z: int
	instrument: str
	label: str


def lane_for (instrument: str, lane: int, mapping: typing.Optional[voxelseq.config.MappingConfig] = None) -> int:

	"""
	Return the z lane of an instrument.

	Known drum names share a fixed lane. Anything else is placed by the
	block it came from, so two blocks never overlap.
	"""

	mapping = mapping or voxelseq.config.MappingConfig()

	if instrument in mapping.instrument_lanes:
		return mapping.instrument_lanes[instrument]

	return mapping.pattern_lane_base + lane


def map_event (event: voxelseq.events.Event, mapping: typing.Optional[voxelseq.config.MappingConfig] = None) -> Voxel:

	"""
	Project one event onto the lattice.

	x follows time (cycles laid out left to right), z follows the lane and
	y follows pitch. Events without a pitch use the default pitch.
	"""

	mapping = mapping or voxelseq.config.MappingConfig()
	blocks = mapping.time_blocks_per_cycle

	x = math.floor(event.cycle * blocks + event.time * blocks) - mapping.center_offset
	z = voxelseq.events.round_half_up(lane_for(event.instrument, event.lane, mapping) * mapping.lane_spacing)

	pitch = event.pitch if event.pitch is not None else mapping.default_pitch
	y = voxelseq.events.round_half_up(mapping.base_height + (pitch - mapping.pitch_base) * mapping.pitch_scale)

	return Voxel(x=x, y=y, z=z, instrument=event.instrument, label=event.label)


def events_to_voxels (events: typing.Iterable[voxelseq.events.Event], mapping: typing.Optional[voxelseq.config.MappingConfig] = None) -> typing.List[Voxel]:

	"""
	Map every event to a voxel, keeping order and count.

	Coinciding voxels are all returned; removing duplicates is up to the caller.
	"""

	mapping = mapping or voxelseq.config.MappingConfig()

	return [map_event(event, mapping) for event in events]
