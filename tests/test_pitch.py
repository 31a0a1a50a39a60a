import pytest

import voxelseq.blocks
import voxelseq.config
import voxelseq.intervals
import voxelseq.pitch


PatternKind = voxelseq.blocks.PatternKind

D_MAJOR = voxelseq.intervals.ScaleContext(root_pitch=62, intervals=(0, 2, 4, 5, 7, 9, 11))
C_MAJOR = voxelseq.intervals.ScaleContext(root_pitch=60, intervals=(0, 2, 4, 5, 7, 9, 11))


@pytest.mark.parametrize("token, expected", [
	("c4", 60),
	("C4", 60),
	("e4", 64),
	("g4", 67),
	("c5", 72),
	("c#4", 61),
	("eb4", 63),
	("bb3", 58),
	("a-1", 9),
	("c+2", 36),
	("d", 62),
])
def test_parse_note (token: str, expected: int) -> None:

	"""Note names map to MIDI numbers with C4 = 60 and octave 4 by default."""

	assert voxelseq.pitch.parse_note(token) == expected


@pytest.mark.parametrize("token", ["h4", "c4.5", "cc", "", "4", "c##4", "sd"])
def test_parse_note_rejects (token: str) -> None:

	"""Anything that is not a note name is rejected."""

	assert voxelseq.pitch.parse_note(token) is None


def test_parse_note_uses_configured_default_octave () -> None:

	"""The default octave comes from the notation config."""

	config = voxelseq.config.NotationConfig(default_octave=3)

	assert voxelseq.pitch.parse_note("c", config) == 48


def test_parse_degree () -> None:

	"""Degrees are finite real numbers."""

	assert voxelseq.pitch.parse_degree("2") == 2.0
	assert voxelseq.pitch.parse_degree("-1.5") == -1.5
	assert voxelseq.pitch.parse_degree(".5") == 0.5
	assert voxelseq.pitch.parse_degree("1e1") == 10.0
	assert voxelseq.pitch.parse_degree("inf") is None
	assert voxelseq.pitch.parse_degree("nan") is None
	assert voxelseq.pitch.parse_degree("1e999") is None
	assert voxelseq.pitch.parse_degree("two") is None


def test_degree_without_scale_is_offset_from_middle_c () -> None:

	"""Without a scale a degree is a chromatic offset from 60."""

	assert voxelseq.pitch.degree_to_pitch(0, None) == 60
	assert voxelseq.pitch.degree_to_pitch(7, None) == 67
	assert voxelseq.pitch.degree_to_pitch(-2, None) == 58
	assert voxelseq.pitch.degree_to_pitch(1.5, None) == 61.5


def test_degree_with_scale () -> None:

	"""Scale degrees count scale steps from the root."""

	assert [voxelseq.pitch.degree_to_pitch(d, D_MAJOR) for d in (0, 2, 4)] == [62, 66, 69]


def test_degree_wraps_octaves () -> None:

	"""Degrees beyond the scale length move up or down an octave."""

	assert voxelseq.pitch.degree_to_pitch(7, C_MAJOR) == 72
	assert voxelseq.pitch.degree_to_pitch(9, C_MAJOR) == 76
	assert voxelseq.pitch.degree_to_pitch(-1, C_MAJOR) == 59
	assert voxelseq.pitch.degree_to_pitch(-7, C_MAJOR) == 48


def test_fractional_degree_interpolates () -> None:

	"""A fractional degree sits between two scale steps."""

	assert voxelseq.pitch.degree_to_pitch(0.5, C_MAJOR) == 61
	assert voxelseq.pitch.degree_to_pitch(2.5, C_MAJOR) == pytest.approx(64.5)
	assert voxelseq.pitch.degree_to_pitch(6.5, C_MAJOR) == pytest.approx(71.5)


def test_fractional_degree_above_first_octave () -> None:

	"""Above the first octave the step width includes the octave offset."""

	# base 72, next interval 2 + 12 against 0
	assert voxelseq.pitch.degree_to_pitch(7.5, C_MAJOR) == 79


def test_resolve_note_token () -> None:

	"""Note blocks give instrument 'note' and the MIDI pitch."""

	resolved = voxelseq.pitch.resolve_token("e4", PatternKind.NOTE)

	assert resolved == voxelseq.pitch.ResolvedToken(instrument="note", pitch=64, label="e4")


def test_resolve_degree_token () -> None:

	"""Degree blocks give instrument 'n'."""

	resolved = voxelseq.pitch.resolve_token("2", PatternKind.DEGREE, D_MAJOR)

	assert resolved == voxelseq.pitch.ResolvedToken(instrument="n", pitch=66, label="2")


def test_resolve_sound_token () -> None:

	"""Sound tokens are used verbatim with no pitch."""

	resolved = voxelseq.pitch.resolve_token("hh", PatternKind.SOUND)

	assert resolved == voxelseq.pitch.ResolvedToken(instrument="hh", pitch=None, label="hh")


def test_unreadable_tokens_are_dropped () -> None:

	"""Tokens that do not parse for their kind resolve to None."""

	assert voxelseq.pitch.resolve_token("bd", PatternKind.NOTE) is None
	assert voxelseq.pitch.resolve_token("c4", PatternKind.DEGREE) is None
	assert voxelseq.pitch.resolve_token("", PatternKind.SOUND) is None
