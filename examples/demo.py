import logging

import voxelseq
import voxelseq.layout
import voxelseq.playback

logging.basicConfig(level=logging.INFO)

# Three lanes: drums, a bass line in note names and a melody in D dorian degrees.
CODE = """
$: s("bd*2 [sd hh] bd <sd cp>").fast(1)
$: note("d2 ~ [f2 a2] c3!2")
$: n("0 2 [4 6] 7.5 ~ 4").scale("d:dorian").slow(2)
"""

result = voxelseq.compile_source(CODE, cycles=4)

print(result.description)

for event, voxel in zip(result.events, result.voxels):
	colour = voxelseq.layout.colour_for(voxel.instrument)
	print(f"lane {event.lane} cycle {event.cycle} t={event.time!s:<5} {event.label:<4} -> ({voxel.x:>3}, {voxel.y:>3}, {voxel.z:>3}) #{colour:06x}")

plan = voxelseq.layout.compute_spawn_plan(result.voxels)

if plan is not None:
	print(f"Spawn at {plan.player_position} on a {len(voxelseq.layout.platform_blocks(plan))}-block platform")

# Plays on the first MIDI output if there is one. Compilation does not depend on it.
voxelseq.playback.play(result.events, bpm=110)
