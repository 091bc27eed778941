from .codec import read_lines, write_lines
from .errors import CoordinatesNotFoundError, EmptyStoreError, FilenameError


class KeyValueStore:
	"""
	File-backed ordered mapping from key to a single text value.

	Shares the line format of ColumnStore, but the value after the first
	``:`` is kept verbatim. Every mutation rewrites the backing file.
	"""

	def __init__(self, path):
		self._path = path
		self._data = {}
		try:
			for key, value in read_lines(path):
				self._data[key] = value
		except FilenameError:
			pass

	@property
	def path(self):
		return self._path

	def save(self, path=None):
		if path is not None:
			self._path = path
		write_lines(self._path, self._data.items())

	def insert(self, key, value):
		"""Insert or replace the value stored at ``key``."""
		self._data[str(key)] = str(value)
		self.save()

	def get(self, key, default=None):
		return self._data.get(str(key), default)

	def delete(self, key):
		key = str(key)
		if key not in self._data:
			raise CoordinatesNotFoundError(f"Key '{key}' does not exist in the store")
		del self._data[key]
		self.save()

	def _reorder(self, sort_key):
		if not self._data:
			raise EmptyStoreError("Store is empty; nothing to sort")
		self._data = dict(sorted(self._data.items(), key=sort_key))
		self.save()

	def sort_by_key(self):
		self._reorder(lambda item: item[0])

	def sort_by_value(self):
		self._reorder(lambda item: item[1])

	def items(self):
		return list(self._data.items())

	def __len__(self):
		return len(self._data)

	def __contains__(self, key):
		return str(key) in self._data

	def __iter__(self):
		return iter(list(self._data))

	def display(self):
		print(repr(self))

	def __repr__(self):
		from .display import _printr
		return _printr(self)
