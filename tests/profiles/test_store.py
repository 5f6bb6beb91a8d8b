import os
import pytest
from unittest.mock import patch
from profile_selector.errors import PersistenceFailure
from profile_selector.profiles.store import LastUsedState, ProfileRecord, ProfileStore

def test_store_iterates_sorted():
    """Test profiles are presented in name order."""
    store = ProfileStore({
        "zeta": ProfileRecord("zeta"),
        "alpha": ProfileRecord("alpha"),
        "Beta": ProfileRecord("Beta"),
    })

    assert store.sorted_names() == ["Beta", "alpha", "zeta"]
    assert [p.name for p in store] == ["Beta", "alpha", "zeta"]
    assert len(store) == 3
    assert "alpha" in store
    assert store.get("missing") is None

def test_record_set_key():
    """Test only recognized keys are stored."""
    record = ProfileRecord("dev")

    assert record.set_key("region", "us-east-1")
    assert not record.set_key("output", "json")
    assert record.region == "us-east-1"

def test_record_str():
    record = ProfileRecord("dev", region="us-east-1", account_id="123")

    assert str(record) == "dev - us-east-1 - Account: 123"

def test_last_used_missing_file(state):
    """Test no file means no last used profile."""
    assert state.read() is None

def test_last_used_write_then_read(state):
    """Test a saved name reads back exactly."""
    state.write("example-prod")

    assert LastUsedState(state.path).read() == "example-prod"
    assert state.path.read_text() == "example-prod"

def test_last_used_read_trims_whitespace(state):
    state.path.write_text("  example-prod \n")

    assert state.read() == "example-prod"

def test_last_used_empty_file(state):
    state.path.write_text("\n")

    assert state.read() is None

def test_last_used_overwrites(state):
    """Test each write replaces the previous value."""
    state.write("a-very-long-profile-name")
    state.write("dev")

    assert state.read() == "dev"
    assert state.path.read_text() == "dev"

def test_last_used_write_leaves_no_temp_files(state):
    state.write("dev")

    assert os.listdir(state.path.parent) == [state.path.name]

def test_last_used_write_failure(tmp_path):
    """Test a write error raises PersistenceFailure and keeps the old value."""
    state = LastUsedState(tmp_path / "last")
    state.write("dev")

    with patch('profile_selector.profiles.store.os.replace', side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(PersistenceFailure) as excinfo:
            state.write("prod")

    assert "Permission denied" in str(excinfo.value)
    assert state.read() == "dev"
    assert os.listdir(tmp_path) == ["last"]

def test_last_used_undecodable_file(state):
    """Test a file that is not UTF-8 counts as no last used profile."""
    state.path.write_bytes(b"\xff\xfeprod")

    assert state.read() is None
