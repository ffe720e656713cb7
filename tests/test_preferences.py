import os
import json
from unittest.mock import patch

import pytest
from dirview.exceptions import PreferencesError
from dirview.preferences import Preferences, PREFERENCES_FILE


def test_defaults(tmp_path):
    prefs = Preferences(str(tmp_path), default_path="/start")
    assert prefs.path == "/start"
    assert prefs.show_hidden_files is False


def test_default_path_is_home(tmp_path):
    assert Preferences(str(tmp_path)).path == os.path.expanduser("~")


def test_persists_across_instances(tmp_path):
    prefs = Preferences(str(tmp_path))
    prefs.path = "/var/log"
    prefs.show_hidden_files = True

    reloaded = Preferences(str(tmp_path))
    assert reloaded.path == "/var/log"
    assert reloaded.show_hidden_files is True
    assert reloaded.to_dict() == {"path": "/var/log", "show_hidden_files": True}

    with open(tmp_path / PREFERENCES_FILE) as f:
        assert json.load(f) == {"path": "/var/log", "show_hidden_files": True}


def test_creates_missing_storage_directory(tmp_path):
    storage = tmp_path / "nested" / "storage"
    prefs = Preferences(str(storage))
    prefs.show_hidden_files = True
    assert (storage / PREFERENCES_FILE).exists()


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_text("{not json")
    prefs = Preferences(str(tmp_path), default_path="/start")
    assert prefs.path == "/start"
    assert prefs.show_hidden_files is False


def test_failed_write_leaves_no_temp_file(tmp_path):
    prefs = Preferences(str(tmp_path))
    with patch("dirview.preferences.os.replace", side_effect=PermissionError(13, "denied")):
        with pytest.raises(PreferencesError):
            prefs.path = "/somewhere"
    assert os.listdir(tmp_path) == []
