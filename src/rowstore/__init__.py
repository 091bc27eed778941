"""
rowstore: an embedded, file-backed tabular store

Keeps an ordered mapping from row key to a list of text cells and
rewrites its backing file after every change. The first row acts as the
header, so cells can be addressed by column name.

Main classes:
	- ColumnStore: keyed rows with named columns, selection and projection
	- KeyValueStore: keyed single values, sharing the same file format

File format, one row per line:

	<key>:<cell1>,<cell2>,...

Zero external dependencies - pure Python stdlib only.
"""

from .table import ColumnStore
from .simple import KeyValueStore
from .naming import KEY_COLUMN, resolve
from .errors import (
	RowStoreError,
	InvalidHeaderError,
	DuplicateColumnError,
	InvalidRowLengthError,
	EmptyStoreError,
	CoordinatesNotFoundError,
	InvalidSelectionRangeError,
	FilenameError,
	PersistenceError,
)

__version__ = "0.1.0"
__all__ = [
	"ColumnStore",
	"KeyValueStore",
	"KEY_COLUMN",
	"resolve",
	"RowStoreError",
	"InvalidHeaderError",
	"DuplicateColumnError",
	"InvalidRowLengthError",
	"EmptyStoreError",
	"CoordinatesNotFoundError",
	"InvalidSelectionRangeError",
	"FilenameError",
	"PersistenceError",
]
