class RowStoreError(Exception):
	"""Base exception for rowstore."""
	pass


class InvalidHeaderError(RowStoreError, ValueError):
	"""Raised when a header row is rejected."""

	def __init__(self, expected, found):
		self.expected = expected
		self.found = found
		super().__init__(f"invalid header (expected {expected!r}, found {found!r})")


class DuplicateColumnError(RowStoreError, ValueError):
	"""Raised when adding a column whose name is already in the header."""

	def __init__(self, column):
		self.column = column
		super().__init__(f"duplicate column name '{column}'")


class InvalidRowLengthError(RowStoreError, ValueError):
	"""Raised by strict stores when a row does not match the header length."""
	pass


class EmptyStoreError(RowStoreError, ValueError):
	"""Raised when an operation needs at least one row."""
	pass


class CoordinatesNotFoundError(RowStoreError, KeyError):
	"""Raised when a key and/or column cannot be located."""

	def __str__(self):
		# KeyError repr()s its argument; keep the plain message
		return str(self.args[0]) if self.args else "could not find column and/or key in store"


class InvalidSelectionRangeError(RowStoreError, IndexError):
	"""Raised for unresolvable columns or out-of-bounds rows in select()."""

	def __init__(self, expected, found):
		self.expected = expected
		self.found = found
		super().__init__(f"invalid selection range (expected {expected}, found {found})")


class FilenameError(RowStoreError, FileNotFoundError):
	"""Raised when loading from a path that does not exist."""

	def __init__(self, path):
		self.path = path
		super().__init__(f"tried to load data from a file that does not exist: '{path}'")


class PersistenceError(RowStoreError, OSError):
	"""Raised when the backing file cannot be read or rewritten."""

	def __init__(self, message, path):
		self.path = path
		super().__init__(message)
