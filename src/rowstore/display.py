"""Display and repr logic for ColumnStore and KeyValueStore."""

from __future__ import annotations
from typing import List


# How many rows to show on each side before inserting "..."
MAX_HEAD_ROWS = 5

EMPTY_CELL = "empty"


def _needs_quoting(text: str) -> bool:
	"""Text needs quoting if it is blank or has leading/trailing whitespace."""
	return text == "" or text != text.strip()


def _format_cell(value: str) -> str:
	if value == "":
		return EMPTY_CELL
	return repr(value) if _needs_quoting(value) else value


def _truncate(rows: list) -> list:
	"""Symmetric preview of ``rows``; None marks the elided middle."""
	if len(rows) > MAX_HEAD_ROWS * 2:
		return rows[:MAX_HEAD_ROWS] + [None] + rows[-MAX_HEAD_ROWS:]
	return rows


def _align(lines: List[List[str]]) -> List[str]:
	"""Left-pad every column of ``lines`` to a common width."""
	num_cols = max(len(line) for line in lines)
	widths = [0] * num_cols
	for line in lines:
		for c, text in enumerate(line):
			widths[c] = max(widths[c], len(text))
	return ["  ".join(text.ljust(widths[c]) for c, text in enumerate(line)).rstrip() for line in lines]


def _footer(store, num_cols=None) -> str:
	if num_cols is None:
		return f"# {len(store)} entry store {str(store.path)!r}"
	return f"# {len(store)}×{num_cols} store {str(store.path)!r}"


def _repr_columns(store) -> str:
	"""Pretty repr for a ColumnStore: header first, then the data rows."""
	if not len(store):
		return _footer(store, 0)

	header_key = store.header_key
	header = store.header
	body = [(k, row) for k, row in store.items() if k != header_key]

	lines = [[f"{header_key} ||"] + [_format_cell(name) for name in header]]
	width = len(header)
	for entry in _truncate(body):
		if entry is None:
			lines.append(["..."])
			continue
		key, row = entry
		width = max(width, len(row))
		lines.append([f"{key} ||"] + [_format_cell(v) for v in row])

	text = _align(lines)
	rule = "-" * max(len(line) for line in text)
	text.insert(1, rule)
	text.append("")
	text.append(_footer(store, width))
	return "\n".join(text)


def _repr_pairs(store) -> str:
	"""Pretty repr for a KeyValueStore: one ``key: value`` line per entry."""
	lines = []
	for entry in _truncate(store.items()):
		if entry is None:
			lines.append("...")
		else:
			key, value = entry
			lines.append(f"{key}: {_format_cell(value)}")
	lines.append("")
	lines.append(_footer(store))
	return "\n".join(lines)


def _printr(store) -> str:
	"""Entry point used by ColumnStore.__repr__ and KeyValueStore.__repr__."""
	from .table import ColumnStore
	if isinstance(store, ColumnStore):
		return _repr_columns(store)
	return _repr_pairs(store)
