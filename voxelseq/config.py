"""Immutable configuration for the compiler.

Lookup tables (note letters, scales, instrument lanes and colours) are passed
around inside these frozen dataclasses instead of being read from module
globals, so a test or an embedding application can swap any of them out.

``load_config()`` builds a ``CompileConfig`` from a YAML file::

    cycles: 4
    mapping:
      time_blocks_per_cycle: 16
      lane_spacing: 3
    instrument_lanes:
      bd: -6
    scales:
      hirajoshi: [0, 2, 3, 7, 8]
"""

import dataclasses
import logging
import os
import types
import typing

import yaml

import voxelseq.constants
import voxelseq.constants.music_mapping as music_mapping
import voxelseq.intervals


logger = logging.getLogger(__name__)


def _frozen_mapping (values: typing.Mapping[str, typing.Any]) -> typing.Mapping[str, typing.Any]:

	return types.MappingProxyType(dict(values))


def _default_scales () -> typing.Mapping[str, typing.Tuple[int, ...]]:

	return _frozen_mapping({name: tuple(intervals) for name, intervals in voxelseq.intervals.SCALE_INTERVALS.items()})


@dataclasses.dataclass(frozen=True)
class NotationConfig:

	"""
	Tables and defaults used to read tokens and modifiers.
	"""

	note_semitones: typing.Mapping[str, int] = dataclasses.field(default_factory=lambda: _frozen_mapping(voxelseq.constants.NOTE_SEMITONES))
	default_octave: int = voxelseq.constants.DEFAULT_NOTE_OCTAVE
	degree_base: int = voxelseq.constants.DEGREE_BASE_PITCH
	default_scale_root: int = voxelseq.constants.DEFAULT_SCALE_ROOT
	default_mode: str = "major"
	fallback_mode: str = "minor"
	scales: typing.Mapping[str, typing.Tuple[int, ...]] = dataclasses.field(default_factory=_default_scales)
	min_rate: float = voxelseq.constants.MIN_RATE

	def __post_init__ (self) -> None:
		if self.min_rate <= 0:
			raise ValueError("min_rate must be positive")
		if voxelseq.intervals.normalize_scale_name(self.fallback_mode) not in self.scales:
			raise ValueError(f"fallback_mode '{self.fallback_mode}' is not in the scale table")


@dataclasses.dataclass(frozen=True)
class MappingConfig:

	"""
	Geometry of the voxel lattice events are projected onto.
	"""

	time_blocks_per_cycle: int = music_mapping.TIME_BLOCKS_PER_CYCLE
	chunk_length: int = music_mapping.CHUNK_LENGTH
	pitch_base: float = music_mapping.PITCH_BASE
	default_pitch: float = music_mapping.DEFAULT_PITCH
	pitch_scale: float = music_mapping.PITCH_SCALE
	lane_spacing: float = music_mapping.LANE_SPACING
	base_height: int = music_mapping.BASE_HEIGHT
	pattern_lane_base: int = music_mapping.PATTERN_LANE_BASE
	instrument_lanes: typing.Mapping[str, int] = dataclasses.field(default_factory=lambda: _frozen_mapping(music_mapping.INSTRUMENT_LANES))
	instrument_colours: typing.Mapping[str, int] = dataclasses.field(default_factory=lambda: _frozen_mapping(music_mapping.INSTRUMENT_COLOURS))
	default_colour: int = music_mapping.DEFAULT_COLOUR

	def __post_init__ (self) -> None:
		if self.time_blocks_per_cycle <= 0:
			raise ValueError("time_blocks_per_cycle must be positive")

	@property
	def center_offset (self) -> int:

		"""Shift applied to x so the first cycles straddle the world origin."""

		return self.time_blocks_per_cycle * 2


@dataclasses.dataclass(frozen=True)
class CompileConfig:

	"""
	Everything ``compile_source()`` needs besides the source text.
	"""

	cycles: int = voxelseq.constants.DEFAULT_CYCLES
	notation: NotationConfig = dataclasses.field(default_factory=NotationConfig)
	mapping: MappingConfig = dataclasses.field(default_factory=MappingConfig)

	def __post_init__ (self) -> None:
		if isinstance(self.cycles, bool) or not isinstance(self.cycles, int):
			raise ValueError(f"cycles must be an integer, got {self.cycles!r}")
		if self.cycles < 1:
			raise ValueError("cycles must be at least 1")


def _field_names (cls: typing.Any) -> typing.Set[str]:

	return {field.name for field in dataclasses.fields(cls)}


def _scalar_overrides (section: typing.Any, cls: typing.Any, section_name: str, reserved: typing.Set[str]) -> typing.Dict[str, typing.Any]:

	"""
	Pick the keys of a YAML section that name plain fields of ``cls``.
	"""

	if section is None:
		return {}

	if not isinstance(section, dict):
		raise ValueError(f"Config section '{section_name}' must be a mapping")

	allowed = _field_names(cls) - reserved
	overrides: typing.Dict[str, typing.Any] = {}

	for key, value in section.items():
		if key in allowed:
			overrides[key] = value
		else:
			logger.warning(f"Ignoring unknown config key '{section_name}.{key}'")

	return overrides


def config_from_dict (data: typing.Optional[typing.Dict[str, typing.Any]]) -> CompileConfig:

	"""
	Build a ``CompileConfig`` from plain data, as read from YAML.

	Missing keys keep their defaults. Table sections (``instrument_lanes``,
	``instrument_colours``, ``scales``) extend the default tables rather than
	replacing them.
	"""

	data = data or {}

	known = {"cycles", "notation", "mapping", "instrument_lanes", "instrument_colours", "scales"}

	for key in data:
		if key not in known:
			logger.warning(f"Ignoring unknown config key '{key}'")

	notation_kwargs = _scalar_overrides(data.get("notation"), NotationConfig, "notation", {"note_semitones", "scales"})
	mapping_kwargs = _scalar_overrides(data.get("mapping"), MappingConfig, "mapping", {"instrument_lanes", "instrument_colours"})

	scales = dict(_default_scales())
	for name, intervals in (data.get("scales") or {}).items():
		voxelseq.intervals.validate_intervals(intervals)
		scales[voxelseq.intervals.normalize_scale_name(name)] = tuple(intervals)

	lanes = dict(music_mapping.INSTRUMENT_LANES)
	lanes.update(data.get("instrument_lanes") or {})

	colours = dict(music_mapping.INSTRUMENT_COLOURS)
	colours.update(data.get("instrument_colours") or {})

	notation = NotationConfig(scales=_frozen_mapping(scales), **notation_kwargs)
	mapping = MappingConfig(
		instrument_lanes = _frozen_mapping(lanes),
		instrument_colours = _frozen_mapping(colours),
		**mapping_kwargs
	)

	return CompileConfig(
		cycles = data.get("cycles", voxelseq.constants.DEFAULT_CYCLES),
		notation = notation,
		mapping = mapping
	)


def load_config (config_path: str = "voxelseq.yaml") -> CompileConfig:

	"""
	Load configuration from a YAML file.

	A missing file is not an error: a warning is logged and the defaults
	are returned.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return CompileConfig()

	with open(config_path, "r") as f:
		data = yaml.safe_load(f)

	if data is not None and not isinstance(data, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping")

	return config_from_dict(data)
