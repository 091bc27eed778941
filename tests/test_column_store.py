"""
Tests for ColumnStore header handling, cell access and structural edits.
"""

import pytest
from rowstore import ColumnStore
from rowstore.errors import (
	CoordinatesNotFoundError,
	DuplicateColumnError,
	InvalidHeaderError,
	InvalidRowLengthError,
	PersistenceError,
)


@pytest.fixture
def path(tmp_path):
	return tmp_path / "people.db"


@pytest.fixture
def store(path):
	s = ColumnStore(path)
	s.set_header("h0", ["name", "age"])
	s.insert("r1", "name", "Alice")
	s.insert("r1", "age", "30")
	return s


class TestConstruction:

	def test_missing_file_gives_empty_store(self, path):
		s = ColumnStore(path)
		assert len(s) == 0
		assert s.header == []
		assert s.header_key is None
		assert not path.exists()

	def test_first_mutation_creates_file(self, path):
		s = ColumnStore(path)
		s.set_header("h0", ["name"])
		assert path.read_text() == "h0:name\n"

	def test_open_existing(self, store, path):
		reopened = ColumnStore.open(path)
		assert reopened == store
		assert reopened.header_key == "h0"


class TestHeader:

	def test_header_is_first_row(self, store):
		assert store.keys()[0] == "h0"
		assert store.header == ["name", "age"]
		assert store.columns == ["name", "age"]

	def test_set_header_moves_existing_key_to_front(self, store):
		store.add_row("r2", ["Bob", "41"])
		store.set_header("r2", ["first", "years"])
		assert store.items()[0] == ("r2", ["first", "years"])
		assert store.keys() == ["r2", "h0", "r1"]
		assert store.header_key == "r2"

	def test_set_header_over_populated_store(self, path):
		s = ColumnStore(path)
		s.add_row("r1", ["Alice", "30"])
		s.add_row("r2", ["Bob", "41"])
		s.set_header("h0", ["name", "age"])
		assert s.keys() == ["h0", "r1", "r2"]
		assert s.get_item("r2", "age") == "41"

	def test_empty_header_rejected(self, store):
		with pytest.raises(InvalidHeaderError) as excinfo:
			store.set_header("h1", [])
		assert excinfo.value.expected == "non-empty values"
		assert store.header_key == "h0"

	def test_duplicate_header_names_rejected(self, store):
		with pytest.raises(InvalidHeaderError):
			store.set_header("h1", ["a", "b", "a"])

	def test_deleting_header_falls_back_to_next_row(self, store):
		store.delete_row("h0")
		assert store.header_key == "r1"
		assert store.header == ["Alice", "30"]

	def test_header_is_a_copy(self, store):
		store.header.append("junk")
		assert store.header == ["name", "age"]


class TestInsert:

	def test_creates_row_sized_to_header(self, store):
		store.insert("r2", "age", "41")
		assert store.row("r2") == ["", "41"]

	def test_overwrites_existing_cell(self, store):
		store.insert("r1", "age", 31)
		assert store.get_item("r1", "age") == "31"

	def test_unknown_column(self, store):
		with pytest.raises(CoordinatesNotFoundError):
			store.insert("r1", "bogus", "x")

	def test_key_column_is_not_writable(self, store):
		with pytest.raises(CoordinatesNotFoundError):
			store.insert("r1", "key", "x")

	def test_short_row_out_of_bounds(self, store):
		store.add_row("r2", ["Bob"])
		with pytest.raises(CoordinatesNotFoundError):
			store.insert("r2", "age", "41")
		assert store.row("r2") == ["Bob"]

	def test_no_header(self, path):
		s = ColumnStore(path)
		with pytest.raises(CoordinatesNotFoundError):
			s.insert("r1", "name", "Alice")
		assert len(s) == 0

	def test_persists(self, store, path):
		assert path.read_text() == "h0:name,age\nr1:Alice,30\n"


class TestGetItem:

	def test_concrete_scenario(self, store):
		assert store.get_item("r1", "name") == "Alice"
		assert store.get_item("r1", "age") == "30"

	def test_key_column_returns_key(self, store):
		assert store.get_item("r1", "key") == "r1"

	def test_unknown_column_returns_empty_string(self, store):
		with pytest.warns(UserWarning, match="bogus"):
			assert store.get_item("r1", "bogus") == ""

	def test_unknown_column_short_circuits_missing_key(self, store):
		with pytest.warns(UserWarning):
			assert store.get_item("nobody", "bogus") == ""

	def test_missing_key(self, store):
		with pytest.raises(CoordinatesNotFoundError):
			store.get_item("nobody", "name")

	def test_short_row_out_of_bounds(self, store):
		store.add_row("r2", ["Bob"])
		with pytest.raises(CoordinatesNotFoundError):
			store.get_item("r2", "age")

	def test_delete_then_get(self, store):
		store.delete_row("r1")
		with pytest.raises(CoordinatesNotFoundError):
			store.get_item("r1", "name")


class TestRows:

	def test_add_row_verbatim(self, store):
		store.add_row("r2", ["Bob", "41", "extra"])
		assert store.row("r2") == ["Bob", "41", "extra"]

	def test_add_row_replaces_in_place(self, store):
		store.add_row("r2", ["Bob", "41"])
		store.add_row("r1", ["Carol", "25"])
		assert store.keys() == ["h0", "r1", "r2"]
		assert store.row("r1") == ["Carol", "25"]

	def test_add_row_to_empty_store_becomes_header(self, path):
		s = ColumnStore(path)
		s.add_row("cols", ["a", "b"])
		assert s.header_key == "cols"
		assert s.header == ["a", "b"]

	def test_delete_row(self, store, path):
		store.delete_row("r1")
		assert "r1" not in store
		assert path.read_text() == "h0:name,age\n"

	def test_delete_missing_row(self, store):
		with pytest.raises(CoordinatesNotFoundError):
			store.delete_row("nobody")
		assert len(store) == 2

	def test_row_returns_copy(self, store):
		store.row("r1")[0] = "Mallory"
		assert store.get_item("r1", "name") == "Alice"


class TestStrict:

	def test_rejects_length_mismatch(self, path):
		s = ColumnStore(path, strict=True)
		s.set_header("h0", ["name", "age"])
		with pytest.raises(InvalidRowLengthError):
			s.add_row("r1", ["Alice"])
		assert "r1" not in s
		assert path.read_text() == "h0:name,age\n"

	def test_accepts_matching_length(self, path):
		s = ColumnStore(path, strict=True)
		s.set_header("h0", ["name", "age"])
		s.add_row("r1", ["Alice", "30"])
		assert s.row("r1") == ["Alice", "30"]

	def test_header_row_is_not_checked(self, path):
		s = ColumnStore(path, strict=True)
		s.add_row("h0", ["name", "age"])
		s.add_row("h0", ["name", "age", "city"])
		assert s.header == ["name", "age", "city"]


class TestAddCol:

	def test_appends_default_to_every_row(self, store):
		store.add_row("r2", ["Bob", "41"])
		before = {k: len(row) for k, row in store.items()}
		store.add_col("city", "unknown")
		for key, row in store.items():
			assert len(row) == before[key] + 1
		assert store.row("r1")[-1] == "unknown"
		assert store.row("r2")[-1] == "unknown"

	def test_new_column_resolves(self, store):
		store.add_col("city")
		assert store.header == ["name", "age", "city"]
		assert store.get_item("r1", "city") == ""
		store.insert("r1", "city", "Paris")
		assert store.get_item("r1", "city") == "Paris"

	def test_duplicate_rejected(self, store):
		store.add_col("x", "d")
		with pytest.raises(DuplicateColumnError):
			store.add_col("x", "d")
		assert len(store.header) == 3
		assert len(store.row("r1")) == 3

	def test_key_name_rejected(self, store):
		with pytest.raises(DuplicateColumnError):
			store.add_col("key")

	def test_empty_store_rejected(self, path):
		s = ColumnStore(path)
		with pytest.raises(InvalidHeaderError):
			s.add_col("x")

	def test_persists(self, store, path):
		store.add_col("city", "?")
		assert path.read_text() == "h0:name,age,city\nr1:Alice,30,?\n"


class TestDeleteCol:

	def test_removes_cell_from_every_row(self, store):
		store.add_row("r2", ["Bob"])
		store.delete_col("age")
		assert store.header == ["name"]
		assert store.row("r1") == ["Alice"]
		assert store.row("r2") == ["Bob"]

	def test_unknown_or_key_column(self, store):
		with pytest.raises(CoordinatesNotFoundError):
			store.delete_col("bogus")
		with pytest.raises(CoordinatesNotFoundError):
			store.delete_col("key")


class TestSaveFailure:

	def test_mutation_raises_but_stays_in_memory(self, tmp_path):
		s = ColumnStore(tmp_path / "missing_dir" / "x.db")
		with pytest.raises(PersistenceError) as excinfo:
			s.set_header("h0", ["a"])
		assert isinstance(excinfo.value.__cause__, OSError)
		assert s.header == ["a"]

	def test_save_elsewhere_recovers(self, tmp_path):
		s = ColumnStore(tmp_path / "missing_dir" / "x.db")
		with pytest.raises(PersistenceError):
			s.set_header("h0", ["a"])
		target = tmp_path / "x.db"
		s.save(target)
		assert s.path == target
		assert target.read_text() == "h0:a\n"


class TestKeyCoercion:

	def test_non_string_keys_reach_the_same_row(self, store):
		store.insert(1, "name", "Dan")
		assert 1 in store
		assert "1" in store
		assert store.get_item(1, "name") == "Dan"
		assert store.get_item(1, "key") == "1"
		assert store.row(1) == ["Dan", ""]
		store.delete_row(1)
		assert "1" not in store

	def test_add_row_with_numeric_key(self, store):
		store.add_row(7, ["Eve", "22"])
		assert store.get_item("7", "age") == "22"
		assert store.get_item(7, "age") == "22"
