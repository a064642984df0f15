"""
Tests for the per-user form progress store.
"""
import pytest

from errors import InvalidKeyError
from form_progress import FormProgressStore


@pytest.fixture
def store(tmp_path):
    return FormProgressStore(tmp_path / "progress")


def test_save_and_get(store):
    saved = store.save("user-1", "employee-handbook", "JVBERi0x")
    loaded = store.get("user-1", "employee-handbook")
    assert loaded == saved
    assert loaded.form_data == "JVBERi0x"


def test_save_is_upsert(store):
    store.save("user-1", "fw4", "first")
    store.save("user-1", "fw4", "second")
    assert store.get("user-1", "fw4").form_data == "second"
    assert len(store.list_forms("user-1")) == 1


def test_get_missing(store):
    assert store.get("user-1", "fw4") is None


def test_users_are_separate(store):
    store.save("user-1", "fw4", "mine")
    assert store.get("user-2", "fw4") is None
    assert store.list_forms("user-2") == []


def test_list_newest_first(store):
    store.save("user-1", "fw4", "a")
    store.save("user-1", "i9", "b")
    store.save("user-1", "adp-deposit", "c")
    names = [r.form_name for r in store.list_forms("user-1")]
    assert names == ["adp-deposit", "i9", "fw4"]


def test_delete(store):
    store.save("user-1", "fw4", "a")
    assert store.delete("user-1", "fw4") is True
    assert store.delete("user-1", "fw4") is False
    assert store.get("user-1", "fw4") is None


@pytest.mark.parametrize("user_id, form_name", [
    ("../etc", "fw4"),
    ("user-1", "fw4/../../x"),
    ("", "fw4"),
    ("user-1", "has space"),
    ("user\n", "employee-handbook"),
    ("user-1", "fw4\n"),
])
def test_invalid_keys(store, user_id, form_name):
    with pytest.raises(InvalidKeyError):
        store.save(user_id, form_name, "a")
