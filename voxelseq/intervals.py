import dataclasses
import typing


SCALE_INTERVALS: typing.Dict[str, typing.List[int]] = {
	"major": [0, 2, 4, 5, 7, 9, 11],
	"minor": [0, 2, 3, 5, 7, 8, 10],
	"ionian": [0, 2, 4, 5, 7, 9, 11],
	"dorian": [0, 2, 3, 5, 7, 9, 10],
	"phrygian": [0, 1, 3, 5, 7, 8, 10],
	"lydian": [0, 2, 4, 6, 7, 9, 11],
	"mixolydian": [0, 2, 4, 5, 7, 9, 10],
	"aeolian": [0, 2, 3, 5, 7, 8, 10],
	"locrian": [0, 1, 3, 5, 6, 8, 10],
	"harmonic_minor": [0, 2, 3, 5, 7, 8, 11],
	"melodic_minor": [0, 2, 3, 5, 7, 9, 11],
	"major_pentatonic": [0, 2, 4, 7, 9],
	"minor_pentatonic": [0, 3, 5, 7, 10],
	"blues": [0, 3, 5, 6, 7, 10],
	"whole_tone": [0, 2, 4, 6, 8, 10],
	"chromatic": [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11],
}


@dataclasses.dataclass(frozen=True)
class ScaleContext:

	"""
	A rooted scale used to turn degrees into pitches.

	``intervals`` are semitone offsets within one octave, starting at 0 and
	strictly increasing.
	"""

	root_pitch: int
	intervals: typing.Tuple[int, ...]

	def __post_init__ (self) -> None:
		validate_intervals(self.intervals)


def normalize_scale_name (name: str) -> str:

	"""
	Fold a user-written scale name onto the registry key format.

	``"Minor Pentatonic"`` and ``"minor-pentatonic"`` both become ``"minor_pentatonic"``.
	"""

	return "_".join(name.strip().lower().replace("-", " ").split())


def validate_intervals (intervals: typing.Sequence[int]) -> None:

	"""
	Raise ``ValueError`` unless the intervals describe a single-octave scale.
	"""

	if not intervals:
		raise ValueError("intervals must not be empty")

	if intervals[0] != 0:
		raise ValueError(f"intervals must start at 0, got {intervals[0]}")

	for previous, current in zip(intervals, intervals[1:]):
		if current <= previous:
			raise ValueError(f"intervals must be strictly increasing: {list(intervals)}")

	if intervals[-1] >= 12:
		raise ValueError(f"intervals must stay within one octave: {list(intervals)}")


def get_intervals (name: str) -> typing.List[int]:

	"""
	Return a named interval list from the registry.
	"""

	key = normalize_scale_name(name)

	if key not in SCALE_INTERVALS:
		raise ValueError(f"Unknown scale: {name}")

	return list(SCALE_INTERVALS[key])


def register_scale (name: str, intervals: typing.Sequence[int]) -> None:

	"""
	Add a named scale to the registry so ``.scale("root:name")`` can use it.

	Configurations created afterwards pick the new scale up; existing
	``NotationConfig`` instances keep the table they were built with.

	Parameters:
		name: Scale name. Case, spaces and hyphens are folded, so
			``"Hira Joshi"`` registers ``"hira_joshi"``.
		intervals: Semitone offsets within one octave, starting at 0.

	Example:
		```python
		register_scale("hirajoshi", [0, 2, 3, 7, 8])
		compile_source('n("0 1 2 3 4").scale("a:hirajoshi")')
		```
	"""

	key = normalize_scale_name(name)

	if not key:
		raise ValueError("Scale name must not be empty")

	validate_intervals(intervals)
	SCALE_INTERVALS[key] = list(intervals)


def scale_names () -> typing.List[str]:

	"""
	Return the registered scale names, sorted.
	"""

	return sorted(SCALE_INTERVALS)
