"""Column name resolution.

Positions are logical: 0 is the row's own key, header column ``i`` is
position ``i + 1``. Row cell lists start at header column 0, so cell
access always goes through :func:`cell_index`.
"""

from __future__ import annotations
from typing import Optional, Sequence


KEY_COLUMN = "key"


def resolve(name: str, header: Sequence[str]) -> Optional[int]:
	"""Translate a column name into a logical position against ``header``.

	``"key"`` always resolves to 0. Any other name resolves to
	``1 + header.index(name)``, or None if the header does not contain it.
	"""
	if name == KEY_COLUMN:
		return 0
	for idx, col in enumerate(header):
		if col == name:
			return idx + 1
	return None


def cell_index(position: Optional[int]) -> Optional[int]:
	"""Row cell index for a resolved position (None for the key sentinel)."""
	if position is None or position <= 0:
		return None
	return position - 1


def missing_columns(names: Sequence[str], header: Sequence[str]) -> list[str]:
	"""Names from ``names`` that do not resolve against ``header``, in order."""
	return [name for name in names if resolve(name, header) is None]
