import logging
import time
import typing

import mido

import voxelseq.constants.gm_drums
import voxelseq.events


logger = logging.getLogger(__name__)


DEFAULT_BPM = 120.0
DEFAULT_BEATS_PER_CYCLE = 4
DEFAULT_VELOCITY = 100
NOTE_CHANNEL = 0

ScheduledMessage = typing.Tuple[float, mido.Message]


def _midi_note (event: voxelseq.events.Event, drum_map: typing.Mapping[str, int]) -> typing.Optional[typing.Tuple[int, int]]:

	"""
	Return ``(channel, note)`` for an event, or None if it has no MIDI equivalent.
	"""

	if event.pitch is not None:
		note = min(127, max(0, voxelseq.events.round_half_up(event.pitch)))
		return NOTE_CHANNEL, note

	drum = drum_map.get(event.instrument.lower())

	if drum is None:
		return None

	return voxelseq.constants.gm_drums.DRUM_CHANNEL, drum


def events_to_messages (
	events: typing.Iterable[voxelseq.events.Event],
	bpm: float = DEFAULT_BPM,
	beats_per_cycle: float = DEFAULT_BEATS_PER_CYCLE,
	drum_map: typing.Optional[typing.Mapping[str, int]] = None
) -> typing.List[ScheduledMessage]:

	"""
	Convert events into a time-ordered list of ``(seconds, message)`` pairs.

	Pitched events play on channel 1 (0-indexed 0). Sound events are looked
	up in the General MIDI drum map and play on channel 10; sounds the map
	does not know are skipped. When a note ends at the same moment another
	starts, the note_off comes first.

	Parameters:
		events: Compiled events, in any order.
		bpm: Tempo in beats per minute.
		beats_per_cycle: How many beats one cycle lasts.
		drum_map: Sound name to drum note. Defaults to ``GM_DRUM_MAP``.
	"""

	if bpm <= 0:
		raise ValueError("bpm must be positive")

	if beats_per_cycle <= 0:
		raise ValueError("beats_per_cycle must be positive")

	drum_map = voxelseq.constants.gm_drums.GM_DRUM_MAP if drum_map is None else drum_map
	seconds_per_cycle = beats_per_cycle * 60.0 / bpm

	# (seconds, order, message); note_off sorts before note_on at equal times
	timeline: typing.List[typing.Tuple[float, int, mido.Message]] = []

	for event in events:

		target = _midi_note(event, drum_map)

		if target is None:
			logger.debug(f"No MIDI note for {event.instrument!r}, skipping")
			continue

		channel, note = target
		start = float(event.cycle + event.time) * seconds_per_cycle
		end = float(event.cycle + event.time + event.duration) * seconds_per_cycle

		timeline.append((start, 1, mido.Message("note_on", channel=channel, note=note, velocity=DEFAULT_VELOCITY)))
		timeline.append((end, 0, mido.Message("note_off", channel=channel, note=note, velocity=0)))

	timeline.sort(key=lambda entry: (entry[0], entry[1]))

	return [(seconds, message) for seconds, _, message in timeline]


def open_output (device_name: typing.Optional[str] = None) -> typing.Tuple[typing.Optional[str], typing.Optional[typing.Any]]:

	"""
	Open a MIDI output port.

	If `device_name` is given, only that device is tried. Otherwise the
	first available output is used. Failures are logged, never raised.

	Returns:
		A tuple of (device_name, midi_out_object) or (None, None) on failure.
	"""

	try:
		outputs = mido.get_output_names()
		logger.info(f"Available MIDI outputs: {outputs}")

		if not outputs:
			logger.error("No MIDI output devices found.")
			return None, None

		if device_name is not None and device_name not in outputs:
			logger.error(f"MIDI output device '{device_name}' not found. Available devices: {outputs}")
			return None, None

		selected_name = device_name if device_name is not None else outputs[0]
		midi_out = mido.open_output(selected_name)
		logger.info(f"Opened MIDI output: {selected_name}")
		return selected_name, midi_out

	except Exception as e:
		logger.error(f"Failed to open MIDI output: {e}")
		return None, None


def play (
	events: typing.Iterable[voxelseq.events.Event],
	device_name: typing.Optional[str] = None,
	bpm: float = DEFAULT_BPM,
	beats_per_cycle: float = DEFAULT_BEATS_PER_CYCLE,
	sleep: typing.Callable[[float], None] = time.sleep
) -> bool:

	"""
	Play compiled events on a MIDI output, blocking until done.

	Playback is optional: if no output can be opened this logs the problem
	and returns False. The events themselves are never affected.
	"""

	schedule = events_to_messages(events, bpm=bpm, beats_per_cycle=beats_per_cycle)
	name, midi_out = open_output(device_name)

	if midi_out is None:
		return False

	logger.info(f"Playing {len(schedule)} MIDI messages on {name}")

	elapsed = 0.0

	try:
		for seconds, message in schedule:
			if seconds > elapsed:
				sleep(seconds - elapsed)
				elapsed = seconds
			midi_out.send(message)
	except KeyboardInterrupt:
		logger.info("Stopping...")
		midi_out.reset()
	finally:
		midi_out.close()

	return True
