import fractions

import voxelseq.config
import voxelseq.events
import voxelseq.voxel_mapper


def _event (cycle: int = 0, time: fractions.Fraction = fractions.Fraction(0), pitch=None, instrument: str = "bd", lane: int = 0) -> voxelseq.events.Event:

	return voxelseq.events.Event(
		cycle = cycle,
		time = time,
		duration = fractions.Fraction(1, 4),
		pitch = pitch,
		instrument = instrument,
		label = instrument,
		lane = lane
	)


def test_x_follows_time ():

	"""x advances eight blocks per cycle, shifted left by the centre offset."""

	mapper = voxelseq.voxel_mapper.map_event

	assert mapper(_event(cycle=0, time=fractions.Fraction(0))).x == -16
	assert mapper(_event(cycle=0, time=fractions.Fraction(1, 2))).x == -12
	assert mapper(_event(cycle=2, time=fractions.Fraction(1, 3))).x == 2


def test_known_instrument_lane ():

	"""Known drum names use the fixed lane table, scaled by lane spacing."""

	assert voxelseq.voxel_mapper.map_event(_event(instrument="bd")).z == -8
	assert voxelseq.voxel_mapper.map_event(_event(instrument="hh")).z == 0
	assert voxelseq.voxel_mapper.map_event(_event(instrument="cr", lane=3)).z == 12


def test_unknown_instrument_uses_block_lane ():

	"""Other instruments are placed by the lane of their block."""

	assert voxelseq.voxel_mapper.map_event(_event(instrument="note", lane=0)).z == 24
	assert voxelseq.voxel_mapper.map_event(_event(instrument="note", lane=1)).z == 26
	assert voxelseq.voxel_mapper.map_event(_event(instrument="cowbell", lane=2)).z == 28


def test_y_follows_pitch ():

	"""Height rises one block per four semitones above the pitch base."""

	mapper = voxelseq.voxel_mapper.map_event

	assert mapper(_event(pitch=36, instrument="note")).y == 4
	assert mapper(_event(pitch=60, instrument="note")).y == 10
	assert mapper(_event(pitch=62, instrument="note")).y == 11
	assert mapper(_event(pitch=61.5, instrument="n")).y == 10
	assert mapper(_event(pitch=24, instrument="note")).y == 1


def test_missing_pitch_uses_default ():

	"""Unpitched events are drawn at middle C height."""

	assert voxelseq.voxel_mapper.map_event(_event(pitch=None)).y == 10
	assert voxelseq.voxel_mapper.map_event(_event(pitch=None)).y == voxelseq.voxel_mapper.map_event(_event(pitch=60, instrument="note")).y


def test_pitch_zero_is_not_treated_as_missing ():

	"""Pitch 0 is a real pitch."""

	assert voxelseq.voxel_mapper.map_event(_event(pitch=0, instrument="note")).y == -5


def test_one_voxel_per_event_in_order ():

	"""Mapping keeps count and order, including coinciding voxels."""

	events = [_event(instrument="hh"), _event(instrument="hh"), _event(instrument="sd", time=fractions.Fraction(1, 2))]

	voxels = voxelseq.voxel_mapper.events_to_voxels(events)

	assert len(voxels) == 3
	assert voxels[0] == voxels[1]
	assert [voxel.instrument for voxel in voxels] == ["hh", "hh", "sd"]


def test_custom_mapping ():

	"""Geometry comes from the mapping config."""

	mapping = voxelseq.config.MappingConfig(time_blocks_per_cycle=4, lane_spacing=3, instrument_lanes={"bd": 1})

	voxel = voxelseq.voxel_mapper.map_event(_event(cycle=1, time=fractions.Fraction(1, 2), instrument="bd"), mapping)

	assert voxel.x == 4 + 2 - 8
	assert voxel.z == 3


def test_lane_for ():

	"""lane_for is a function of instrument and block lane only."""

	assert voxelseq.voxel_mapper.lane_for("sd", 5) == -2
	assert voxelseq.voxel_mapper.lane_for("piano", 5) == 17
