import dataclasses
import logging
import re
import typing


logger = logging.getLogger(__name__)


REST_SYMBOLS = ("", "~", ".")

_WHITESPACE_RE = re.compile(r"\s+")
_WEIGHT_RE = re.compile(r"@[\w.]+")
_MULTIPLY_RE = re.compile(r"(\[[^\]]+\]|[^\s\[\]*]+)\*(\d+)")
_REPLICATE_RE = re.compile(r"^(.*)!(\d+)$")
_REPLICATE_SUFFIX_RE = re.compile(r"!(\d+)")


Step = typing.Tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class Word:

	"""A single token occupying one step."""

	text: str


@dataclasses.dataclass(frozen=True)
class Rest:

	"""An empty step."""


@dataclasses.dataclass(frozen=True)
class Group:

	"""Tokens stacked into one step: ``[a b c]``."""

	items: typing.Tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class Replicate:

	"""``value!count`` - the value repeated as ``count`` consecutive steps."""

	node: typing.Union[Word, Rest, Group]
	count: int


Node = typing.Union[Word, Rest, Group, Replicate]


class MiniNotationError (Exception):
	pass


def normalize (body: str) -> str:

	"""
	Reduce a pattern body to the supported subset.

	In order: whitespace runs collapse to one space, commas become spaces,
	``<`` and ``>`` are removed (their contents join the surrounding
	sequence), ``@weight`` suffixes are dropped and ``x*n`` expands to ``n``
	space-separated copies of ``x``.

	Example:
		```python
		normalize("bd*2 <sd cp>@3")  # → "bd bd sd cp"
		```
	"""

	normalized = _WHITESPACE_RE.sub(" ", body).replace(",", " ").strip()
	normalized = normalized.replace("<", " ").replace(">", " ")
	normalized = _WEIGHT_RE.sub("", normalized)
	normalized = _MULTIPLY_RE.sub(lambda match: " ".join([match.group(1)] * int(match.group(2))), normalized)

	return _WHITESPACE_RE.sub(" ", normalized).strip()


def _atom (text: str) -> typing.Union[Word, Rest]:

	if text.strip() in REST_SYMBOLS:
		return Rest()

	return Word(text.strip())


def _word_node (text: str) -> Node:

	"""
	Read a whitespace-delimited unit that is not a bracketed group.
	"""

	match = _REPLICATE_RE.match(text)

	if match:
		return Replicate(_atom(match.group(1)), int(match.group(2)))

	return _atom(text)


def _group_node (content: str) -> Group:

	return Group(tuple(content.split()))


def parse (body: str, strict: bool = False) -> typing.List[Node]:

	"""
	Parse a pattern body into a flat list of nodes, one per unit.

	A unit is either a bracketed group ``[...]`` (up to the first ``]``,
	optionally followed by ``!count``) or a maximal run of non-whitespace.

	Parameters:
		body: The raw pattern string from inside the constructor call.
		strict: Raise ``MiniNotationError`` on unbalanced brackets instead
			of reading them as ordinary characters.

	Returns:
		The nodes in source order.
	"""

	text = normalize(body)
	nodes: typing.List[Node] = []
	position = 0

	while position < len(text):

		if text[position].isspace():
			position += 1
			continue

		if text[position] == "[":
			closing = text.find("]", position + 1)

			if closing >= 0:
				group = _group_node(text[position + 1:closing])
				position = closing + 1

				suffix = _REPLICATE_SUFFIX_RE.match(text, position)
				if suffix and (suffix.end() == len(text) or text[suffix.end()].isspace()):
					nodes.append(Replicate(group, int(suffix.group(1))))
					position = suffix.end()
				else:
					nodes.append(group)
				continue

			if strict:
				raise MiniNotationError("Missing closing bracket")

		end = position
		while end < len(text) and not text[end].isspace():
			end += 1

		unit = text[position:end]

		if strict and "]" in unit:
			raise MiniNotationError("Unexpected closing bracket")

		nodes.append(_word_node(unit))
		position = end

	return nodes


def to_steps (nodes: typing.Sequence[Node]) -> typing.List[Step]:

	"""
	Lay nodes out as rhythmic steps.

	A word is a one-token step, a rest an empty step, a group one step with
	all its tokens, and a replicate its inner step repeated ``count`` times.
	"""

	steps: typing.List[Step] = []

	for node in nodes:

		if isinstance(node, Replicate):
			steps.extend(to_steps([node.node]) * node.count)

		elif isinstance(node, Group):
			steps.append(node.items)

		elif isinstance(node, Word):
			steps.append((node.text,))

		else:
			steps.append(())

	return steps


def tokenize (body: str) -> typing.List[Step]:

	"""
	Turn a pattern body into its step grid.

	The number of steps is the number of equal slots in one cycle before the
	rate is applied.

	Example:
		```python
		tokenize("bd [sd hh] ~ bd!2")
		# → [("bd",), ("sd", "hh"), (), ("bd",), ("bd",)]
		```
	"""

	steps = to_steps(parse(body))

	logger.debug(f"Tokenized {body!r} into {len(steps)} steps")

	return steps
