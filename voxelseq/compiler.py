import dataclasses
import logging
import typing

import voxelseq.blocks
import voxelseq.config
import voxelseq.events
import voxelseq.source
import voxelseq.voxel_mapper


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class CompileResult:

	"""
	Everything produced from one source.

	``description`` is a one-line status: where the source came from, a
	snippet of it and how many lanes it produced.
	"""

	code: str
	description: str
	blocks: typing.Tuple[voxelseq.blocks.PatternBlock, ...]
	events: typing.Tuple[voxelseq.events.Event, ...]
	voxels: typing.Tuple[voxelseq.voxel_mapper.Voxel, ...]

	@property
	def lanes (self) -> int:
		return len(self.blocks)


SourceLike = typing.Union[voxelseq.source.SourceRef, str, None]


def _as_source_ref (source: SourceLike) -> typing.Optional[voxelseq.source.SourceRef]:

	if isinstance(source, str):
		return voxelseq.source.SourceRef("code", source)

	return source


def compile_source (
	source: SourceLike = None,
	config: typing.Optional[voxelseq.config.CompileConfig] = None,
	cycles: typing.Optional[int] = None
) -> CompileResult:

	"""
	Compile pattern source text into events and voxels.

	Problems in the source never raise: unreadable tokens are dropped,
	malformed modifiers fall back to their defaults and a source without
	any pattern compiles to the default drum pattern. The description
	string is the only place such fallbacks show.

	Parameters:
		source: A ``SourceRef``, plain code (treated as inline code) or
			None for the default pattern.
		config: Compiler configuration. Defaults to ``CompileConfig()``.
		cycles: Overrides ``config.cycles`` when given. Must be at least 1.

	Returns:
		A ``CompileResult``. Events are ordered by lane, then cycle, then
		time. Voxels match events one to one.

	Example:
		```python
		result = compile_source('$: note("c4 e4 g4 c5")', cycles=1)
		[event.pitch for event in result.events]  # → [60, 64, 67, 72]
		result.description  # → 'inline: $: note("c4 e4 g4 c5") (1 lane)'
		```
	"""

	config = config or voxelseq.config.CompileConfig()

	if cycles is not None:
		config = dataclasses.replace(config, cycles=cycles)

	code, description = voxelseq.source.resolve_source(_as_source_ref(source))
	blocks = voxelseq.blocks.extract_blocks(code)

	events: typing.List[voxelseq.events.Event] = []

	for lane, block in enumerate(blocks):
		events.extend(voxelseq.events.generate_events(block, lane, config.cycles, config.notation))

	voxels = voxelseq.voxel_mapper.events_to_voxels(events, config.mapping)

	lanes = len(blocks)
	status = f"{description} ({lanes} lane{'' if lanes == 1 else 's'})"

	logger.info(f"Compiled {len(events)} events over {config.cycles} cycles: {status}")

	return CompileResult(
		code = code,
		description = status,
		blocks = tuple(blocks),
		events = tuple(events),
		voxels = tuple(voxels)
	)
