"""
Split source text into pattern blocks.

A source holds zero or more statements introduced by ``$:``. Each statement
is searched for the first call of a pattern constructor applied to a single
quoted string::

    $: note("c4 e4 g4").slow(2)
    $: s("bd*2 [sd hh]")
    $: n("0 2 4").scale("d:major")

The grammar recognised here is deliberately small:

    source      := preamble? "$:" statement ("\n" ws* "$:" statement)*
    statement   := <text> call <modifiers>
    call        := name ws* "(" ws* quote body quote ws* ")"
    name        := "note" | "sound" | "s" | "n"     (case-insensitive)
    quote       := "'" | '"' | "`"                 (closing quote must match)

Only a ``$:`` that starts a line opens a new statement, so ``$:`` inside a
pattern body stays part of it. ``//`` line comments are ignored while
searching. Anything that does not fit is skipped; extraction never raises.
"""

import dataclasses
import enum
import logging
import re
import typing

import voxelseq.constants


logger = logging.getLogger(__name__)


STATEMENT_DELIMITER = "$:"
QUOTES = ("'", '"', "`")
LINE_COMMENT = "//"

_STATEMENT_BREAK_RE = re.compile(r"\n\s*\$:")


class PatternKind (enum.Enum):

	"""How the tokens of a block are read."""

	NOTE = "note"
	SOUND = "sound"
	DEGREE = "n"


CONSTRUCTORS: typing.Dict[str, PatternKind] = {
	"note": PatternKind.NOTE,
	"sound": PatternKind.SOUND,
	"s": PatternKind.SOUND,
	"n": PatternKind.DEGREE,
}


@dataclasses.dataclass(frozen=True)
class PatternBlock:

	"""
	One pattern statement found in the source.

	``modifiers`` is the raw text after the constructor call, kept for the
	modifier resolver.
	"""

	kind: PatternKind
	body: str
	modifiers: str = ""


DEFAULT_BLOCK = PatternBlock(kind=PatternKind.SOUND, body=voxelseq.constants.DEFAULT_BLOCK_BODY, modifiers="")


def _is_identifier_char (char: str) -> bool:

	return char.isalnum() or char == "_"


def split_statements (code: str) -> typing.List[str]:

	"""
	Return the text of each ``$:`` statement, trimmed.

	Text before the first delimiter is a preamble and is not returned. After
	that, a statement ends only where a line begins with ``$:``. A source
	without any delimiter has no statements.
	"""

	start = code.find(STATEMENT_DELIMITER)

	if start < 0:
		return []

	parts = _STATEMENT_BREAK_RE.split(code[start + len(STATEMENT_DELIMITER):])

	return [part.strip() for part in parts]


def _skip_whitespace (text: str, position: int) -> int:

	while position < len(text) and text[position].isspace():
		position += 1

	return position


def _parse_call (text: str, position: int) -> typing.Optional[typing.Tuple[str, int]]:

	"""
	Parse ``( "body" )`` starting at ``position``.

	Returns the body and the index just past the closing parenthesis, or
	None when the text there is not a single-string call.
	"""

	position = _skip_whitespace(text, position)

	if position >= len(text) or text[position] != "(":
		return None

	position = _skip_whitespace(text, position + 1)

	if position >= len(text) or text[position] not in QUOTES:
		return None

	quote = text[position]
	body_start = position + 1
	body_end = text.find(quote, body_start)

	# An empty body does not count as a call.
	if body_end <= body_start:
		return None

	position = _skip_whitespace(text, body_end + 1)

	if position >= len(text) or text[position] != ")":
		return None

	return text[body_start:body_end], position + 1


def find_constructor_call (text: str) -> typing.Optional[PatternBlock]:

	"""
	Find the first recognised constructor call in ``text``.

	A name only counts when it stands alone as an identifier, so ``gain("0.5")``
	is not read as ``n("0.5")``. Quoted strings and ``//`` comments are
	skipped over while searching. A quote with no partner is an ordinary
	character, so an apostrophe in prose does not hide a later call.
	"""

	position = 0

	while position < len(text):

		char = text[position]

		if text.startswith(LINE_COMMENT, position):
			newline = text.find("\n", position)
			position = len(text) if newline < 0 else newline + 1
			continue

		if char in QUOTES:
			closing = text.find(char, position + 1)
			position = position + 1 if closing < 0 else closing + 1
			continue

		if not _is_identifier_char(char):
			position += 1
			continue

		start = position
		while position < len(text) and _is_identifier_char(text[position]):
			position += 1

		kind = CONSTRUCTORS.get(text[start:position].lower())

		if kind is None:
			continue

		call = _parse_call(text, position)

		if call is None:
			continue

		body, end = call
		return PatternBlock(kind=kind, body=body, modifiers=text[end:])

	return None


def extract_blocks (code: str) -> typing.List[PatternBlock]:

	"""
	Extract the pattern blocks of a source, in source order.

	Statements without a recognised constructor call are dropped. If no
	statement yields a block, the whole text is searched once for a call
	(so a bare ``note("c e g")`` works). If that fails too, a single default
	drum block is returned, so the result is never empty.
	"""

	trimmed = code.strip()
	blocks: typing.List[PatternBlock] = []

	for statement in split_statements(trimmed):

		block = find_constructor_call(statement)

		if block is None:
			logger.debug(f"No pattern constructor in statement: {statement[:40]!r}")
			continue

		blocks.append(block)

	if not blocks:
		block = find_constructor_call(trimmed)
		if block is not None:
			blocks.append(block)

	if not blocks:
		logger.warning("No pattern blocks were parsed from input. Falling back to default.")
		return [DEFAULT_BLOCK]

	for lane, block in enumerate(blocks):
		logger.info(f"Pattern block {lane}: {block.kind.value} {block.body!r} modifiers={block.modifiers.strip()!r}")

	return blocks
