import dataclasses
import logging
import math
import re
import typing

import voxelseq.blocks
import voxelseq.config
import voxelseq.intervals


logger = logging.getLogger(__name__)


_NOTE_RE = re.compile(r"^([a-zA-Z])([#b]?)([+-]?\d+)?$")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

Pitch = typing.Union[int, float]


@dataclasses.dataclass(frozen=True)
class ResolvedToken:

	"""
	What a single token plays: an instrument name, an optional pitch and a label.
	"""

	instrument: str
	pitch: typing.Optional[Pitch]
	label: str


def _as_number (value: float) -> Pitch:

	"""Keep whole values as ``int`` so they compare and print cleanly."""

	if float(value).is_integer():
		return int(value)

	return value


def parse_note (token: str, config: typing.Optional[voxelseq.config.NotationConfig] = None) -> typing.Optional[int]:

	"""
	Convert a note name to a MIDI note number.

	Accepts a letter ``a``-``g`` (either case), an optional ``#`` or ``b``
	and an optional signed octave, which defaults to 4. C4 = 60.

	Returns None when the token is not a note name.

	Example:
		```python
		parse_note("c4")   # → 60
		parse_note("eb")   # → 63
		parse_note("a-1")  # → 9
		```
	"""

	config = config or voxelseq.config.NotationConfig()
	match = _NOTE_RE.match(token.strip())

	if not match:
		return None

	letter, accidental, octave_text = match.groups()
	semitone = config.note_semitones.get(letter.lower())

	if semitone is None:
		return None

	if accidental == "#":
		semitone += 1
	elif accidental == "b":
		semitone -= 1

	octave = int(octave_text) if octave_text is not None else config.default_octave

	return semitone + (octave + 1) * 12


def parse_degree (token: str) -> typing.Optional[float]:

	"""
	Parse a scale degree. Fractional degrees are allowed; ``nan`` and
	``inf`` are not.
	"""

	text = token.strip()

	if not _NUMBER_RE.match(text):
		return None

	value = float(text)

	if not math.isfinite(value):
		return None

	return value


def degree_to_pitch (degree: float, scale: typing.Optional[voxelseq.intervals.ScaleContext], config: typing.Optional[voxelseq.config.NotationConfig] = None) -> Pitch:

	"""
	Resolve a scale degree to a pitch.

	Without a scale the degree is a semitone offset from middle C. With a
	scale, degrees count scale steps from the root and wrap into higher or
	lower octaves. A fractional degree interpolates linearly towards the
	next scale step.

	Example:
		```python
		d_major = ScaleContext(root_pitch=62, intervals=(0, 2, 4, 5, 7, 9, 11))
		degree_to_pitch(2, d_major)    # → 66
		degree_to_pitch(-1, d_major)   # → 61
		degree_to_pitch(0.5, d_major)  # → 63
		```
	"""

	if scale is None:
		config = config or voxelseq.config.NotationConfig()
		return _as_number(config.degree_base + degree)

	intervals = scale.intervals
	size = len(intervals)

	floored = math.floor(degree)
	fraction = degree - floored
	octave_offset = floored // size
	index = floored % size

	base = scale.root_pitch + intervals[index] + 12 * octave_offset

	if fraction == 0:
		return _as_number(base)

	next_index = (index + 1) % size
	wrap = 12 if index + 1 >= size else 0
	next_interval = intervals[next_index] + 12 * octave_offset + wrap

	# next_interval carries the octave offset but intervals[index] does not.
	return _as_number(base + fraction * (next_interval - intervals[index]))


def resolve_token (
	token: str,
	kind: voxelseq.blocks.PatternKind,
	scale: typing.Optional[voxelseq.intervals.ScaleContext] = None,
	config: typing.Optional[voxelseq.config.NotationConfig] = None
) -> typing.Optional[ResolvedToken]:

	"""
	Interpret one raw token for a block of the given kind.

	Returns None when the token cannot be read for that kind. The caller
	drops such tokens: no event is produced and no default pitch is
	substituted.
	"""

	config = config or voxelseq.config.NotationConfig()
	text = token.strip()

	if not text:
		return None

	if kind is voxelseq.blocks.PatternKind.NOTE:
		midi = parse_note(text, config)
		if midi is None:
			logger.debug(f"Dropping token {text!r}: not a note name")
			return None
		return ResolvedToken(instrument="note", pitch=midi, label=text)

	if kind is voxelseq.blocks.PatternKind.DEGREE:
		degree = parse_degree(text)
		if degree is None:
			logger.debug(f"Dropping token {text!r}: not a number")
			return None
		return ResolvedToken(instrument="n", pitch=degree_to_pitch(degree, scale, config), label=text)

	return ResolvedToken(instrument=text, pitch=None, label=text)
