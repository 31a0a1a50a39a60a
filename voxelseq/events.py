import dataclasses
import fractions
import logging
import math
import typing

import voxelseq.blocks
import voxelseq.config
import voxelseq.constants
import voxelseq.intervals
import voxelseq.mini_notation
import voxelseq.modifiers
import voxelseq.pitch


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Event:

	"""
	One timed musical event.

	``time`` and ``duration`` are exact fractions of a cycle. ``lane`` is the
	index of the block that produced the event.
	"""

	cycle: int
	time: fractions.Fraction
	duration: fractions.Fraction
	pitch: typing.Optional[voxelseq.pitch.Pitch]
	instrument: str
	label: str
	lane: int
	velocity: int = 1


@dataclasses.dataclass(frozen=True)
class ParsedBlock:

	"""
	A block reduced to its step grid, rate and scale.
	"""

	steps: typing.Tuple[voxelseq.mini_notation.Step, ...]
	rate: float
	scale: typing.Optional[voxelseq.intervals.ScaleContext]


def round_half_up (value: float) -> int:

	"""
	Round to the nearest integer with halves rounded up.

	Unlike ``round()``, which rounds halves to even: ``round_half_up(2.5) == 3``
	and ``round_half_up(-2.5) == -2``.
	"""

	return math.floor(value + 0.5)


def parse_block (block: voxelseq.blocks.PatternBlock, config: typing.Optional[voxelseq.config.NotationConfig] = None) -> ParsedBlock:

	"""
	Tokenize a block body and resolve its modifiers.

	A body without any step becomes a single rest so the grid always has at
	least one slot.
	"""

	steps = voxelseq.mini_notation.tokenize(block.body) or [()]
	modifiers = voxelseq.modifiers.resolve_modifiers(block.modifiers, config)

	return ParsedBlock(steps=tuple(steps), rate=modifiers.rate, scale=modifiers.scale)


def slots_per_cycle (step_count: int, rate: float, min_rate: float = voxelseq.constants.MIN_RATE) -> int:

	"""
	Return how many equal slots one cycle is divided into.

	``fast`` replays the step list more often within a cycle, ``slow`` plays
	fewer slots of it. The rate is clamped to ``min_rate`` first.
	"""

	rate = max(rate, min_rate)

	return max(1, round_half_up(step_count * rate))


def generate_events (
	block: voxelseq.blocks.PatternBlock,
	lane: int,
	cycles: int = voxelseq.constants.DEFAULT_CYCLES,
	config: typing.Optional[voxelseq.config.NotationConfig] = None
) -> typing.List[Event]:

	"""
	Generate the events of one block over ``cycles`` cycles.

	Each cycle is cut into ``slots_per_cycle`` equal slots. Slot ``i`` plays
	step ``i mod step_count``, so a faster rate replays the step list rather
	than resampling it. Every token in a step becomes its own event at the
	same time; tokens the pitch resolver cannot read are dropped.

	Events come out ordered by cycle, then slot, then token position.

	Parameters:
		block: The pattern block to play.
		lane: Index of the block among all blocks of the source.
		cycles: Number of cycles to generate (at least 1).
		config: Notation tables and defaults.

	Example:
		```python
		block = PatternBlock(PatternKind.NOTE, "c4 [e4 g4]")
		[(e.time, e.pitch) for e in generate_events(block, lane=0, cycles=1)]
		# → [(Fraction(0, 1), 60), (Fraction(1, 2), 64), (Fraction(1, 2), 67)]
		```
	"""

	if cycles < 1:
		raise ValueError("cycles must be at least 1")

	config = config or voxelseq.config.NotationConfig()
	parsed = parse_block(block, config)

	step_count = len(parsed.steps)
	slots = slots_per_cycle(step_count, parsed.rate, config.min_rate)
	step_duration = fractions.Fraction(1, slots)

	# A step resolves the same way every time it plays.
	resolved_steps: typing.List[typing.List[voxelseq.pitch.ResolvedToken]] = []
	for step in parsed.steps:
		resolved = [voxelseq.pitch.resolve_token(token, block.kind, parsed.scale, config) for token in step]
		resolved_steps.append([item for item in resolved if item is not None])

	events: typing.List[Event] = []

	for cycle in range(cycles):
		for slot in range(slots):

			time = fractions.Fraction(slot, slots)

			for item in resolved_steps[slot % step_count]:
				events.append(Event(
					cycle = cycle,
					time = time,
					duration = step_duration,
					pitch = item.pitch,
					instrument = item.instrument,
					label = item.label,
					lane = lane
				))

	logger.debug(f"Lane {lane}: {step_count} steps, rate {parsed.rate}, {slots} slots per cycle, {len(events)} events")

	return events
