"""
Resolve where pattern source text comes from.

A page or tool hands the compiler a ``SourceRef``: inline code, a base64
payload from a URL fragment, or a share ID. Share IDs need a server to look
up and are never resolved here; they fall back to the default pattern, as
does any payload that fails to decode. Nothing in this module touches the
network.
"""

import base64
import binascii
import dataclasses
import logging
import typing
import urllib.parse

import voxelseq.constants


logger = logging.getLogger(__name__)


SNIPPET_LENGTH = 48

SOURCE_KINDS = ("code", "hash", "shareId")


@dataclasses.dataclass(frozen=True)
class SourceRef:

	"""
	Where the source text came from, and the raw text or payload.
	"""

	kind: str
	text: str

	def __post_init__ (self) -> None:
		if self.kind not in SOURCE_KINDS:
			raise ValueError(f"Unknown source kind '{self.kind}'. Expected one of {SOURCE_KINDS}")


def describe (prefix: str, code: str) -> str:

	"""
	Return ``"<prefix>: <snippet>"`` with the code collapsed onto one line and truncated.
	"""

	compact = " ".join(code.split())

	if len(compact) > SNIPPET_LENGTH:
		compact = compact[:SNIPPET_LENGTH] + "…"

	return f"{prefix}: {compact}"


def decode_hash_payload (payload: str) -> typing.Optional[str]:

	"""
	Decode a URL-quoted base64 payload into source text.

	Whitespace is ignored, missing padding is tolerated and the URL-safe
	alphabet is accepted. Returns None on any decoding failure or when the
	decoded text is empty.
	"""

	sanitized = urllib.parse.unquote("".join(payload.split()))
	sanitized = sanitized.replace("-", "+").replace("_", "/")
	sanitized += "=" * (-len(sanitized) % 4)

	try:
		decoded = base64.b64decode(sanitized, validate=True).decode("utf-8").strip()
	except (binascii.Error, ValueError) as exc:
		logger.error(f"Failed to decode hash payload: {exc}")
		return None

	return decoded or None


def resolve_source (source: typing.Optional[SourceRef]) -> typing.Tuple[str, str]:

	"""
	Return ``(code, description)`` for a source reference.

	The description is meant for display and is the only place decoding
	problems surface.
	"""

	if source is None:
		return voxelseq.constants.DEFAULT_SOURCE, voxelseq.constants.DEFAULT_STATUS

	if source.kind == "code":
		return source.text, describe("inline", source.text)

	if source.kind == "hash":
		decoded = decode_hash_payload(source.text)
		if decoded:
			return decoded, describe("hash", decoded)
		return voxelseq.constants.DEFAULT_SOURCE, "hash decode failed - fallback pattern"

	logger.info(f"Share ID {source.text!r} cannot be resolved offline")

	return voxelseq.constants.DEFAULT_SOURCE, f"share ID ({source.text}) not supported offline"


def source_from_url (url: str) -> typing.Optional[SourceRef]:

	"""
	Work out the source reference carried by a page URL.

	Checked in order:

	- ``?code=...`` - inline code (URL-decoded).
	- any other query - a share ID, or a hash payload if it starts with ``#``.
	- a fragment - a hash payload. A fragment that is itself a full
	  ``http(s)`` URL with its own fragment (a pasted share link) uses the
	  nested fragment.

	Returns None when the URL carries nothing.

	Example:
		```python
		source_from_url("https://example.com/?code=note(%22c4%22)")
		# → SourceRef(kind="code", text='note("c4")')
		```
	"""

	parsed = urllib.parse.urlsplit(url)

	if parsed.query:
		params = urllib.parse.parse_qs(parsed.query, keep_blank_values=True)
		if "code" in params:
			return SourceRef("code", params["code"][0].strip())

		raw_query = urllib.parse.unquote(parsed.query).strip()
		if raw_query.startswith("#"):
			return SourceRef("hash", raw_query[1:])
		return SourceRef("shareId", raw_query)

	fragment = parsed.fragment.strip()

	if not fragment:
		return None

	if fragment.lower().startswith(("http://", "https://")):
		nested = urllib.parse.urlsplit(fragment)
		if nested.fragment:
			return SourceRef("hash", nested.fragment)

	return SourceRef("hash", fragment)
