"""Line-oriented text format shared by both store variants.

One row per line::

	<key>:<cell1>,<cell2>,...,<cellN>

Only the first ``:`` separates the key. Cells are not escaped, so a ``,``
inside a cell (or a ``:`` inside a key) does not survive a round trip.
"""

from __future__ import annotations
import os
import warnings
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from .errors import FilenameError, PersistenceError


KEY_SEPARATOR = ":"
CELL_SEPARATOR = ","
ENCODING = "utf-8"


def split_line(line: str) -> Optional[Tuple[str, str]]:
	"""Split a stored line into (key, payload), or None if it has no separator."""
	line = line.rstrip("\r\n")
	key, sep, payload = line.partition(KEY_SEPARATOR)
	if not sep:
		return None
	return key, payload


def decode_cells(payload: str) -> list[str]:
	return payload.split(CELL_SEPARATOR)


def encode_cells(cells: Sequence[str]) -> str:
	if not cells:
		warnings.warn("Row with no cells is stored as one empty cell and will not round-trip")
	for cell in cells:
		if CELL_SEPARATOR in cell or "\n" in cell:
			warnings.warn(f"Cell {cell!r} contains a separator and will not round-trip")
	return CELL_SEPARATOR.join(cells)


def encode_line(key: str, payload: str) -> str:
	if KEY_SEPARATOR in key or "\n" in key:
		warnings.warn(f"Key {key!r} contains a separator and will not round-trip")
	if "\n" in payload:
		warnings.warn(f"Value {payload!r} contains a newline and will not round-trip")
	return f"{key}{KEY_SEPARATOR}{payload}\n"


def read_lines(path) -> Iterator[Tuple[str, str]]:
	"""Yield (key, payload) pairs from ``path``.

	Raises FilenameError if the file does not exist. Lines that are not
	valid text or have no key separator are skipped with a warning.
	"""
	if not os.path.exists(path):
		raise FilenameError(path)
	try:
		with open(path, "rb") as fh:
			for lineno, raw in enumerate(fh, start=1):
				try:
					line = raw.decode(ENCODING)
				except UnicodeDecodeError:
					warnings.warn(f"Skipping malformed line {lineno} in '{path}': not valid {ENCODING}")
					continue
				parts = split_line(line)
				if parts is None:
					if line.strip():
						warnings.warn(f"Skipping malformed line {lineno} in '{path}'")
					continue
				yield parts
	except OSError as exc:
		raise PersistenceError(f"Failed to read '{path}': {exc}", path) from exc


def write_lines(path, pairs: Iterable[Tuple[str, str]]) -> None:
	"""Truncate ``path`` and write every (key, payload) pair, in order."""
	# Fully encoded before the file is truncated
	text = "".join(encode_line(key, payload) for key, payload in pairs)
	try:
		data = text.encode(ENCODING)
	except UnicodeEncodeError as exc:
		raise PersistenceError(f"Failed to encode data for '{path}': {exc}", path) from exc
	try:
		with open(path, "wb") as fh:
			fh.write(data)
	except OSError as exc:
		raise PersistenceError(f"Failed to write '{path}': {exc}", path) from exc
