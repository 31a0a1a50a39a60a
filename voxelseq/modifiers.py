"""
Read the chained modifiers that follow a pattern constructor.

Only three are understood: ``.fast(x)``, ``.slow(y)`` and
``.scale("root:mode")``. The first occurrence of each wins and any other
chained call is ignored. A malformed value falls back to that modifier's
default rather than failing the block.
"""

import dataclasses
import logging
import math
import re
import typing

import voxelseq.config
import voxelseq.intervals
import voxelseq.pitch


logger = logging.getLogger(__name__)


_SCALE_RE = re.compile(r"\.scale\(\s*(['\"`])([^'\"`]+)\1\s*\)", re.IGNORECASE)


@dataclasses.dataclass(frozen=True)
class Modifiers:

	"""
	The rate and optional scale attached to a block.
	"""

	rate: float = 1.0
	scale: typing.Optional[voxelseq.intervals.ScaleContext] = None


def _call_pattern (name: str) -> typing.Pattern[str]:

	return re.compile(r"\." + re.escape(name) + r"\(([^)]*)\)")


_FAST_RE = _call_pattern("fast")
_SLOW_RE = _call_pattern("slow")


def extract_number (modifiers: str, pattern: typing.Pattern[str], default: float) -> float:

	"""
	Return the numeric argument of the first call matched by ``pattern``.

	Quotes around the number are accepted (``.fast("2")``). Anything that
	does not read as a finite number yields ``default``.
	"""

	match = pattern.search(modifiers)

	if not match:
		return default

	text = match.group(1).strip().strip("'\"`").strip()

	try:
		value = float(text)
	except ValueError:
		logger.debug(f"Malformed modifier value {match.group(0)!r}, using {default}")
		return default

	if not math.isfinite(value):
		logger.debug(f"Non-finite modifier value {match.group(0)!r}, using {default}")
		return default

	return value


def resolve_rate (modifiers: str) -> float:

	"""
	Return ``fast / slow`` for the modifier text, or 1 when that is not finite.
	"""

	fast = extract_number(modifiers, _FAST_RE, 1.0)
	slow = extract_number(modifiers, _SLOW_RE, 1.0)

	try:
		rate = fast / slow
	except ZeroDivisionError:
		return 1.0

	if not math.isfinite(rate):
		return 1.0

	return rate


def resolve_scale (modifiers: str, config: typing.Optional[voxelseq.config.NotationConfig] = None) -> typing.Optional[voxelseq.intervals.ScaleContext]:

	"""
	Build the ``ScaleContext`` for a ``.scale("root:mode")`` call, if any.

	An unreadable root falls back to the configured default root (middle C).
	A missing mode means the configured default mode (major); an unknown
	mode falls back to the configured fallback mode (minor).

	Example:
		```python
		resolve_scale('.scale("d:major")')
		# → ScaleContext(root_pitch=62, intervals=(0, 2, 4, 5, 7, 9, 11))
		```
	"""

	config = config or voxelseq.config.NotationConfig()
	match = _SCALE_RE.search(modifiers)

	if not match:
		return None

	root_text, _, mode_text = match.group(2).partition(":")

	root = voxelseq.pitch.parse_note(root_text.strip(), config)
	if root is None:
		logger.debug(f"Unreadable scale root {root_text!r}, using {config.default_scale_root}")
		root = config.default_scale_root

	mode = voxelseq.intervals.normalize_scale_name(mode_text) or config.default_mode

	if mode not in config.scales:
		logger.debug(f"Unknown scale mode {mode_text!r}, falling back to {config.fallback_mode}")
		mode = voxelseq.intervals.normalize_scale_name(config.fallback_mode)

	return voxelseq.intervals.ScaleContext(root_pitch=root, intervals=tuple(config.scales[mode]))


def resolve_modifiers (modifiers: str, config: typing.Optional[voxelseq.config.NotationConfig] = None) -> Modifiers:

	"""
	Extract rate and scale from a block's modifier text.
	"""

	return Modifiers(rate=resolve_rate(modifiers), scale=resolve_scale(modifiers, config))
