"""Voxel lattice constants.

One cycle occupies ``TIME_BLOCKS_PER_CYCLE`` blocks along x. Lanes are spread
along z, ``LANE_SPACING`` blocks apart. Pitch raises a block one step for
every four semitones above ``PITCH_BASE``.

Sound names found in ``INSTRUMENT_LANES`` share a lane no matter which
pattern block produced them. Everything else (``note``, ``n`` and unknown
sounds) sits at ``PATTERN_LANE_BASE + lane`` so separate blocks stay apart.

Sounds carry no pitch and are drawn at ``DEFAULT_PITCH`` (middle C), which
puts drums at the same height as a ``c4`` note.
"""

import typing


TIME_BLOCKS_PER_CYCLE = 8
CHUNK_LENGTH = 8
PITCH_BASE = 36
DEFAULT_PITCH = 60
PITCH_SCALE = 0.25
LANE_SPACING = 2
BASE_HEIGHT = 4
PATTERN_LANE_BASE = 12


INSTRUMENT_LANES: typing.Dict[str, int] = {
	"bd": -4,
	"sd": -2,
	"rim": -1,
	"hh": 0,
	"oh": 1,
	"lt": 2,
	"mt": 3,
	"ht": 4,
	"rd": 5,
	"cr": 6,
}


INSTRUMENT_COLOURS: typing.Dict[str, int] = {
	"bd": 0x8b4513,
	"sd": 0xc0c0c0,
	"rim": 0xd1a26d,
	"hh": 0xf2d16b,
	"oh": 0xf4f1c9,
	"lt": 0x9c6f56,
	"mt": 0xa98274,
	"ht": 0xc79f8f,
	"rd": 0x66b3ff,
	"cr": 0xffd966,
	"note": 0x88c0ff,
	"n": 0xffa94d,
	"sound": 0xb0bec5,
}

DEFAULT_COLOUR = 0xffffff
