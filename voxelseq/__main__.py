import argparse
import json
import logging
import sys
import typing

import voxelseq.compiler
import voxelseq.config
import voxelseq.playback
import voxelseq.source


logger = logging.getLogger(__name__)


def _event_record (event: typing.Any) -> typing.Dict[str, typing.Any]:

	return {
		"cycle": event.cycle,
		"time": float(event.time),
		"duration": float(event.duration),
		"velocity": event.velocity,
		"pitch": event.pitch,
		"instrument": event.instrument,
		"label": event.label,
		"lane": event.lane,
	}


def _voxel_record (voxel: typing.Any) -> typing.Dict[str, typing.Any]:

	return {"x": voxel.x, "y": voxel.y, "z": voxel.z, "instrument": voxel.instrument, "label": voxel.label}


def build_parser () -> argparse.ArgumentParser:

	"""
	Create the command line parser.
	"""

	parser = argparse.ArgumentParser(prog="voxelseq", description="Compile mini-notation patterns into events and voxels")

	group = parser.add_mutually_exclusive_group()
	group.add_argument("--code", help="Pattern source text, e.g. '$: s(\"bd sd\")'")
	group.add_argument("--url", help="Page URL carrying ?code=..., a share ID or a #base64 fragment")

	parser.add_argument("--cycles", type=int, default=None, help="Number of cycles to generate (default: from config, 6)")
	parser.add_argument("--config", default="voxelseq.yaml", help="YAML config file (default: voxelseq.yaml)")
	parser.add_argument("--voxels", action="store_true", help="Also print the voxels")
	parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
	parser.add_argument("--play", nargs="?", const="", default=None, metavar="DEVICE", help="Play the events on a MIDI output (first available if no name)")
	parser.add_argument("--bpm", type=float, default=voxelseq.playback.DEFAULT_BPM, help="Playback tempo (default: 120)")
	parser.add_argument("--verbose", action="store_true", help="Log debug output")

	return parser


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point for the voxelseq command.
	"""

	args = build_parser().parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

	source: typing.Optional[voxelseq.source.SourceRef] = None

	if args.code is not None:
		source = voxelseq.source.SourceRef("code", args.code)

	elif args.url is not None:
		source = voxelseq.source.source_from_url(args.url)

	try:
		config = voxelseq.config.load_config(args.config)
		result = voxelseq.compiler.compile_source(source, config=config, cycles=args.cycles)
	except ValueError as e:
		logger.error(str(e))
		return 2

	if args.json:
		payload: typing.Dict[str, typing.Any] = {
			"description": result.description,
			"eventCount": len(result.events),
			"events": [_event_record(event) for event in result.events],
		}
		if args.voxels:
			payload["voxelCount"] = len(result.voxels)
			payload["voxels"] = [_voxel_record(voxel) for voxel in result.voxels]
		print(json.dumps(payload, indent=2))

	else:
		print(result.description)
		for event in result.events:
			pitch = "-" if event.pitch is None else f"{event.pitch:g}"
			print(f"lane {event.lane}  cycle {event.cycle}  t={str(event.time):<6} d={str(event.duration):<6} {event.label:<8} pitch {pitch}")
		if args.voxels:
			for voxel in result.voxels:
				print(f"({voxel.x}, {voxel.y}, {voxel.z})  {voxel.label}")

	if args.play is not None:
		device_name = args.play or None
		if not voxelseq.playback.play(result.events, device_name=device_name, bpm=args.bpm):
			logger.warning("Playback unavailable - events were compiled but not played")

	return 0


if __name__ == "__main__":
	sys.exit(main())
