import typing

import mido
import pytest


class FakeMidiOut:

	"""Minimal MIDI output stub for tests."""

	def __init__ (self, name: str) -> None:

		"""Start with an empty message log."""

		self.name = name
		self.sent: typing.List[mido.Message] = []
		self.closed = False

	def send (self, message: mido.Message) -> None:

		"""Record outgoing MIDI messages."""

		self.sent.append(message)

	def close (self) -> None:

		"""Mark the fake device closed."""

		self.closed = True

	def reset (self) -> None:

		"""No-op reset for the fake device."""

		return None


# Module-level reference so tests can access the most recently opened FakeMidiOut.
_current_fake_output: typing.Optional[FakeMidiOut] = None


def _fake_get_output_names () -> list[str]:

	"""Return a fixed list of MIDI output names for tests."""

	return ["Dummy MIDI", "Other MIDI"]


def _fake_open_output (name: str) -> FakeMidiOut:

	"""Return a fake MIDI output regardless of the name."""

	global _current_fake_output
	fake = FakeMidiOut(name)
	_current_fake_output = fake
	return fake


@pytest.fixture
def patch_midi (monkeypatch: pytest.MonkeyPatch) -> typing.Callable[[], typing.Optional[FakeMidiOut]]:

	"""Patch mido to use fake MIDI outputs; returns a getter for the last opened port."""

	monkeypatch.setattr(mido, "get_output_names", _fake_get_output_names)
	monkeypatch.setattr(mido, "open_output", _fake_open_output)

	return lambda: _current_fake_output


@pytest.fixture
def no_midi (monkeypatch: pytest.MonkeyPatch) -> None:

	"""Patch mido so that no MIDI outputs are available."""

	monkeypatch.setattr(mido, "get_output_names", lambda: [])
