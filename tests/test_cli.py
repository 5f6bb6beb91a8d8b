import pytest
from unittest.mock import patch
from profile_selector import cli
from profile_selector.errors import IdentityCheckFailure

@pytest.fixture
def env(monkeypatch, credentials_file, tmp_path):
    """Point the CLI at temporary files."""
    last_used = tmp_path / "last"
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(credentials_file))
    monkeypatch.setenv("PROFILE_SELECTOR_LAST_USED_FILE", str(last_used))
    monkeypatch.delenv("PROFILE_SELECTOR_IDENTITY_BACKEND", raising=False)
    monkeypatch.delenv("PROFILE_SELECTOR_RANKING", raising=False)
    monkeypatch.delenv("USE_ONEPASS_CLI", raising=False)
    return last_used

@pytest.fixture
def aws():
    """Mock the AWS CLI calls made after a selection."""
    with patch('profile_selector.cli.get_current_region', return_value="us-west-2") as region, \
         patch('profile_selector.cli.check_identity', return_value='{"Account": "123456789012"}') as identity:
        yield region, identity

def run_cli(argv, prompt):
    with patch('profile_selector.cli.QuestionaryPrompt', return_value=prompt):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(argv)
    return excinfo.value.code

def test_select_from_menu(env, aws, capsys, fake_prompt):
    """Test a menu selection is saved and verified."""
    prompt = fake_prompt(select_answer="example-test")

    code = run_cli([], prompt)

    assert code == 0
    assert env.read_text() == "example-test"
    out = capsys.readouterr().out
    assert "Current default region: us-west-2" in out
    assert "Selected profile: example-test - eu-west-1 - Account: 210987654321" in out
    assert "✅ Account: 123456789012" in out
    aws[1].assert_called_once_with("example-test", "cli", "aws", 15.0)

def test_search_suggestion_confirmed(env, aws, fake_prompt):
    prompt = fake_prompt(confirm_answer=True)

    assert run_cli(["prod"], prompt) == 0
    assert env.read_text() == "example-prod"
    assert prompt.select_calls == []

def test_search_option(env, aws, fake_prompt):
    prompt = fake_prompt(confirm_answer=True)

    assert run_cli(["-s", "sand"], prompt) == 0
    assert env.read_text() == "sandbox"

def test_fuzzy_flag(env, aws, fake_prompt):
    prompt = fake_prompt(confirm_answer=True)

    assert run_cli(["--fuzzy", "sandbx"], prompt) == 0
    assert env.read_text() == "sandbox"

def test_cancel_exits_zero_without_saving(env, aws, capsys, fake_prompt):
    """Test cancelling reports and leaves no last used file."""
    code = run_cli([], fake_prompt(select_answer=None))

    assert code == 0
    assert not env.exists()
    assert "Selection cancelled" in capsys.readouterr().err
    aws[1].assert_not_called()

def test_missing_credentials_file(env, aws, monkeypatch, tmp_path, capsys, fake_prompt):
    """Test an unreadable credentials file exits non-zero."""
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "nope"))

    code = run_cli([], fake_prompt())

    assert code == cli.EXIT_CONFIG_ERROR
    err = capsys.readouterr().err
    assert "Error reading AWS credentials" in err
    assert len(err.strip().splitlines()) == 1

def test_no_profiles_exits_zero(env, aws, credentials_file, capsys, fake_prompt):
    credentials_file.write_text("[default]\nregion=us-east-1\n")

    assert run_cli([], fake_prompt()) == 0
    assert "No non-default profiles found" in capsys.readouterr().err

def test_use_last(env, aws, fake_prompt):
    env.write_text("sandbox\n")
    prompt = fake_prompt()

    assert run_cli(["-l"], prompt) == 0
    assert prompt.select_calls == []
    assert env.read_text() == "sandbox"

def test_use_last_missing(env, aws, capsys, fake_prompt):
    assert run_cli(["--last"], fake_prompt()) == cli.EXIT_CONFIG_ERROR
    assert "No last used profile found." in capsys.readouterr().err

def test_identity_failure_is_a_warning(env, aws, capsys, fake_prompt):
    """Test a failed identity check does not undo the selection."""
    aws[1].side_effect = IdentityCheckFailure("example-test", "ExpiredToken")

    code = run_cli([], fake_prompt(select_answer="example-test"))

    assert code == 0
    assert env.read_text() == "example-test"
    assert "ExpiredToken" in capsys.readouterr().err

def test_no_identity_check(env, aws, fake_prompt):
    assert run_cli(["--no-identity-check"], fake_prompt(select_answer="sandbox")) == 0
    aws[1].assert_not_called()

def test_persistence_failure(env, aws, monkeypatch, tmp_path, capsys, fake_prompt):
    """Test a save failure exits with its own status."""
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    monkeypatch.setenv("PROFILE_SELECTOR_LAST_USED_FILE", str(blocker / "last"))

    code = run_cli([], fake_prompt(select_answer="sandbox"))

    assert code == cli.EXIT_PERSISTENCE_ERROR
    assert "Could not save last used profile" in capsys.readouterr().err
    aws[1].assert_not_called()
