import json

import pytest

from trackamate.session import TOKEN_KEY, SessionStore


def test_session_lifecycle(tmp_path):
    store = SessionStore(tmp_path / 'session.json')
    assert not store.is_logged_in()

    store.save_session('abc123')
    assert store.is_logged_in()
    assert store.get_token() == 'abc123'
    assert json.loads((tmp_path / 'session.json').read_text())[TOKEN_KEY] == 'abc123'

    store.clear_session()
    assert not store.is_logged_in()
    assert store.get_token() is None


def test_blank_token_is_rejected(tmp_path):
    store = SessionStore(tmp_path / 'session.json')
    with pytest.raises(ValueError):
        store.save_session('   ')
    assert not store.is_logged_in()


def test_corrupt_session_file_means_logged_out(tmp_path):
    path = tmp_path / 'session.json'
    path.write_text('garbage', encoding='utf-8')
    store = SessionStore(path)
    assert not store.is_logged_in()
    store.save_session('fresh')
    assert store.get_token() == 'fresh'


def test_clear_session_without_session_does_not_create_file(tmp_path):
    path = tmp_path / 'session.json'
    SessionStore(path).clear_session()
    assert not path.exists()
