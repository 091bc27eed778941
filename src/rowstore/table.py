import warnings
from .naming import KEY_COLUMN, resolve, cell_index, missing_columns
from .codec import read_lines, write_lines, decode_cells, encode_cells
from .errors import (
	InvalidHeaderError,
	DuplicateColumnError,
	InvalidRowLengthError,
	CoordinatesNotFoundError,
	InvalidSelectionRangeError,
	FilenameError,
)


def _not_found(key, column=None):
	if column is None:
		return CoordinatesNotFoundError(f"Key '{key}' not found in store")
	return CoordinatesNotFoundError(f"Could not find column '{column}' for key '{key}' in store")


def _row_bounds(rows, num_rows):
	"""Normalize a row selection to (start, stop) over ``num_rows`` rows."""
	if rows is None:
		return 0, num_rows
	if isinstance(rows, range):
		start, stop, step = rows.start, rows.stop, rows.step
	elif isinstance(rows, slice):
		start = 0 if rows.start is None else rows.start
		stop = num_rows if rows.stop is None else rows.stop
		step = 1 if rows.step is None else rows.step
	else:
		raise InvalidSelectionRangeError(
			"a range or slice of rows",
			f"{type(rows).__name__}"
		)

	if step != 1 or start < 0 or stop < 0:
		raise InvalidSelectionRangeError(
			f"a contiguous, non-negative row range within 0..{num_rows}",
			f"{start}..{stop} step {step}"
		)
	if stop > num_rows:
		raise InvalidSelectionRangeError(
			f"row range within 0..{num_rows}",
			f"end of range {stop}"
		)
	return start, max(start, stop)


class ColumnStore:
	"""
	File-backed ordered mapping from row key to a list of text cells.

	The header row supplies the column names used by ``insert``,
	``get_item``, ``add_col`` and ``select``. Every mutation rewrites the
	whole backing file before returning.

	Parameters
	----------
	path : str or os.PathLike
		Backing file. A missing file gives an empty store.
	strict : bool
		Reject rows whose length differs from the header in ``add_row``.
	"""

	def __init__(self, path, strict=False):
		self._path = path
		self._strict = strict
		self._rows = {}
		self._header_key = None
		try:
			self._load()
		except FilenameError:
			# First use: the file is created by the first mutation
			pass

	@classmethod
	def open(cls, path, strict=False):
		"""Load an existing store; raises FilenameError if ``path`` is missing."""
		store = cls._from_rows(path, {}, None, strict)
		store._load()
		return store

	@classmethod
	def _from_rows(cls, path, rows, header_key, strict=False):
		store = cls.__new__(cls)
		store._path = path
		store._strict = strict
		store._rows = rows
		store._header_key = header_key
		return store

	# ------------------------------------------------------------------
	# Persistence

	def _load(self):
		rows = {}
		for key, payload in read_lines(self._path):
			rows[key] = decode_cells(payload)
		self._rows = rows
		self._header_key = next(iter(rows), None)

	def save(self, path=None):
		"""Rewrite the backing file. With ``path``, re-point the store there first."""
		if path is not None:
			self._path = path
		write_lines(self._path, ((key, encode_cells(row)) for key, row in self._rows.items()))

	# ------------------------------------------------------------------
	# Header

	@property
	def path(self):
		return self._path

	@property
	def strict(self):
		return self._strict

	@property
	def header_key(self):
		"""Key of the row supplying column names (None for an empty store)."""
		if self._header_key in self._rows:
			return self._header_key
		return next(iter(self._rows), None)

	@property
	def header(self):
		key = self.header_key
		if key is None:
			return []
		return list(self._rows[key])

	columns = header

	def set_header(self, key, values):
		"""Make (key, values) the header row, placed first in row order."""
		values = [str(v) for v in values]
		if not values:
			raise InvalidHeaderError("non-empty values", "empty sequence")
		duplicates = sorted({v for v in values if values.count(v) > 1})
		if duplicates:
			raise InvalidHeaderError("unique column names", f"duplicates {duplicates!r}")

		key = str(key)
		rows = {key: values}
		for existing_key, row in self._rows.items():
			if existing_key != key:
				rows[existing_key] = row
		self._rows = rows
		self._header_key = key
		self.save()

	def _resolve(self, column):
		return resolve(column, self.header)

	# ------------------------------------------------------------------
	# Cells

	def insert(self, key, column, value):
		"""Write ``value`` at (key, column), creating the row if needed."""
		key = str(key)
		header = self.header
		position = resolve(column, header)
		idx = cell_index(position)
		if idx is None:
			raise _not_found(key, column)

		row = self._rows.get(key)
		if row is None:
			row = [""] * len(header)
			self._rows[key] = row
		elif idx >= len(row):
			raise _not_found(key, column)

		row[idx] = str(value)
		self.save()

	def get_item(self, key, column):
		"""
		Return the cell at (key, column).

		An unknown column returns "" with a warning rather than raising, so
		"missing column" and "empty cell" look the same to the caller.
		"""
		position = self._resolve(column)
		if position is None:
			warnings.warn(f"Column '{column}' not found in header; returning ''")
			return ""

		key = str(key)
		row = self._rows.get(key)
		if row is None:
			raise _not_found(key)
		if position == 0:
			return key

		idx = cell_index(position)
		if idx >= len(row):
			raise _not_found(key, column)
		return row[idx]

	# ------------------------------------------------------------------
	# Rows

	def add_row(self, key, cells):
		"""Insert or replace the row at ``key`` verbatim."""
		key = str(key)
		cells = [str(c) for c in cells]
		if self._strict and self._rows and key != self.header_key:
			expected = len(self.header)
			if len(cells) != expected:
				raise InvalidRowLengthError(
					f"Row '{key}' has {len(cells)} cells; header has {expected}"
				)
		if not self._rows:
			self._header_key = key
		self._rows[key] = cells
		self.save()

	def delete_row(self, key):
		key = str(key)
		if key not in self._rows:
			raise _not_found(key)
		del self._rows[key]
		if key == self._header_key:
			self._header_key = next(iter(self._rows), None)
		self.save()

	def row(self, key):
		key = str(key)
		if key not in self._rows:
			raise _not_found(key)
		return list(self._rows[key])

	# ------------------------------------------------------------------
	# Columns

	def add_col(self, name, default=""):
		"""Append ``name`` to the header and ``default`` to every other row."""
		name = str(name)
		header_key = self.header_key
		if header_key is None:
			raise InvalidHeaderError("a header row", "empty store")
		if name == KEY_COLUMN or name in self._rows[header_key]:
			raise DuplicateColumnError(name)

		default = str(default)
		for key, row in self._rows.items():
			row.append(name if key == header_key else default)
		self.save()

	def delete_col(self, name):
		"""Remove the named column's cell from every row that has it."""
		idx = cell_index(self._resolve(name))
		if idx is None:
			raise CoordinatesNotFoundError(f"Column '{name}' not found in header")

		for row in self._rows.values():
			if idx < len(row):
				del row[idx]
		self.save()

	# ------------------------------------------------------------------
	# Selection

	def select(self, rows=None, columns=None):
		"""
		Return a new store holding a slice of rows and a projection of columns.

		The result shares this store's path but is not written to it; call
		``save(path)`` on the result to persist it elsewhere.

		Parameters
		----------
		rows : range or slice, optional
			Half-open range over the current row order. None selects all rows.
		columns : sequence of str or str, optional
			Column names to keep, in the order given. ``"key"`` is accepted
			but adds no cell (keys are carried as keys). None keeps every cell.

		Raises
		------
		InvalidSelectionRangeError
			If any column name is unknown (nothing is returned) or the row
			range ends past the last row.
		"""
		header = self.header

		if isinstance(columns, str):
			columns = [columns]
		if columns is not None:
			columns = list(columns)
			missing = missing_columns(columns, header)
			if missing:
				raise InvalidSelectionRangeError(
					f"Valid column names from header: {header!r}",
					f"Missing columns: {missing!r}"
				)
			indices = [cell_index(resolve(name, header)) for name in columns]
			indices = [idx for idx in indices if idx is not None]
		else:
			indices = None

		items = list(self._rows.items())
		start, stop = _row_bounds(rows, len(items))

		selected = {}
		for key, row in items[start:stop]:
			if indices is None:
				selected[key] = list(row)
			else:
				selected[key] = [row[idx] for idx in indices if idx < len(row)]

		header_key = self.header_key if self.header_key in selected else next(iter(selected), None)
		return self._from_rows(self._path, selected, header_key, self._strict)

	# ------------------------------------------------------------------
	# Container protocol

	def keys(self):
		return list(self._rows)

	def items(self):
		return [(key, list(row)) for key, row in self._rows.items()]

	def to_dict(self):
		return {key: list(row) for key, row in self._rows.items()}

	def __len__(self):
		return len(self._rows)

	def __contains__(self, key):
		return str(key) in self._rows

	def __iter__(self):
		return iter(list(self._rows))

	def __eq__(self, other):
		if not isinstance(other, ColumnStore):
			return NotImplemented
		return list(self._rows.items()) == list(other._rows.items())

	__hash__ = None

	def display(self):
		"""Print the store as an aligned text table."""
		print(repr(self))

	def __repr__(self):
		from .display import _printr
		return _printr(self)
