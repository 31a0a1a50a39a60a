"""
voxelseq - compile music mini-notation into timed events and a voxel world.

voxelseq reads the compact pattern notation used by live-coding tools such
as Strudel and Tidal, turns it into a deterministic list of timed musical
events spanning several cycles, and projects those events onto an integer
3D lattice so a renderer can build a walkable landscape out of a beat.

What it understands:

- **Pattern statements.** ``$: note("...")``, ``$: s("...")`` /
  ``sound("...")`` and ``$: n("...")``, one lane per statement.
- **Mini-notation subset.** Space-separated steps, ``[a b]`` stacked
  steps, ``~`` and ``.`` rests, ``x*3`` and ``x!3`` repeats. ``<...>``
  alternation is flattened and ``@weight`` is ignored.
- **Rate and scale.** ``.fast(n)``, ``.slow(n)`` and
  ``.scale("root:mode")`` with fractional scale degrees.
- **Graceful fallback.** Unreadable tokens are dropped, bad modifier
  values use defaults, and a source with no pattern compiles to a default
  drum beat. Compilation never raises over the source text.

Outputs:

- ``Event`` records with exact fractional times (``fractions.Fraction``).
- ``Voxel`` records: x follows time, z follows the lane, y follows pitch.
- Optional MIDI playback of the events through mido.

Minimal example:

    ```python
    import voxelseq

    result = voxelseq.compile_source('$: n("0 2 4").scale("d:major")', cycles=2)

    print(result.description)
    for event, voxel in zip(result.events, result.voxels):
        print(event.cycle, event.time, event.pitch, (voxel.x, voxel.y, voxel.z))
    ```

Package-level exports: ``compile_source``, ``CompileConfig``, ``SourceRef``,
``events_to_voxels``, ``load_config``, ``register_scale``.
"""

import voxelseq.compiler
import voxelseq.config
import voxelseq.intervals
import voxelseq.source
import voxelseq.voxel_mapper


compile_source = voxelseq.compiler.compile_source
CompileConfig = voxelseq.config.CompileConfig
SourceRef = voxelseq.source.SourceRef
events_to_voxels = voxelseq.voxel_mapper.events_to_voxels
load_config = voxelseq.config.load_config
register_scale = voxelseq.intervals.register_scale
