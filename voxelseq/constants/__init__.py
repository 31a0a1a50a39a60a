"""Constants for voxelseq.

This package contains:

- ``voxelseq.constants.music_mapping`` - Voxel lattice geometry, instrument lanes and colours
- ``voxelseq.constants.gm_drums`` - General MIDI drum notes for the short sound names used in patterns

The defaults used when a source yields nothing playable live here directly.
"""

DEFAULT_SOURCE = '$: s("bd [sd hh] bd sd").fast(1)'
DEFAULT_STATUS = "default pattern"

# Body of the block substituted when no constructor call is found anywhere.
DEFAULT_BLOCK_BODY = "bd [sd hh] bd sd"

DEFAULT_CYCLES = 6
DEFAULT_NOTE_OCTAVE = 4

# Middle C. Degrees without a scale are offsets from here.
DEGREE_BASE_PITCH = 60
DEFAULT_SCALE_ROOT = 60

NOTE_SEMITONES = {
	"c": 0,
	"d": 2,
	"e": 4,
	"f": 5,
	"g": 7,
	"a": 9,
	"b": 11,
}

# Rates below this are clamped before dividing the cycle.
MIN_RATE = 0.0001
