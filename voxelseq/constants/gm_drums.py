"""General MIDI drum notes for pattern sound names.

Patterns name drums with the short Tidal/Strudel abbreviations (``bd``,
``sd``, ``hh`` ...). This map turns those names into General MIDI Level 1
percussion notes for channel 10 (0-indexed channel 9) so compiled sound
events can be sent to any GM-compatible drum machine.
"""

import typing


DRUM_CHANNEL = 9

KICK_1 = 36
SIDE_STICK = 37
SNARE_1 = 38
HAND_CLAP = 39
HI_HAT_CLOSED = 42
LOW_TOM = 45
HI_HAT_OPEN = 46
LOW_MID_TOM = 47
CRASH_1 = 49
HIGH_TOM = 50
RIDE_1 = 51
TAMBOURINE = 54
COWBELL = 56


GM_DRUM_MAP: typing.Dict[str, int] = {
	"bd": KICK_1,
	"rim": SIDE_STICK,
	"sd": SNARE_1,
	"cp": HAND_CLAP,
	"hh": HI_HAT_CLOSED,
	"lt": LOW_TOM,
	"oh": HI_HAT_OPEN,
	"mt": LOW_MID_TOM,
	"cr": CRASH_1,
	"ht": HIGH_TOM,
	"rd": RIDE_1,
	"tb": TAMBOURINE,
	"cb": COWBELL,
}
