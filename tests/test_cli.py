"""Tests for the formulator command-line interface."""

import json
from unittest.mock import patch

from click.testing import CliRunner

from formulator.cli.main import cli

FORM_ENV = {
    'HONEYPOT_FIELD': 'no-spam-pls',
    'REQUIRED_FIELDS': 'email,message',
    'EMAIL_FIELDS': 'email',
    'DISCORD_WEBHOOK_URL': 'https://discord.com/api/webhooks/1/secret',
}


def _run(args, env=FORM_ENV):
    runner = CliRunner()
    with patch('formulator.config.settings.load_dotenv'):
        return runner.invoke(cli, args, env=env)


def test_check_config_prints_masked_settings():
    """Test that check-config shows settings without webhook secrets."""
    result = _run(['check-config'])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data['required_fields'] == ['email', 'message']
    assert data['discord_webhook_url'] == 'https://discord.com/***'
    assert 'secret' not in result.output


def test_check_config_invalid_settings():
    """Test that invalid configuration exits with an error."""
    result = _run(['check-config'], env={'REQUEST_PATH': 'contact'})

    assert result.exit_code == 1
    assert "REQUEST_PATH must start with '/'" in result.output


def test_validate_accepts_valid_submission(tmp_path):
    """Test that a valid submission file passes."""
    submission = tmp_path / 'submission.json'
    submission.write_text(json.dumps({'email': 'a@b.com', 'message': 'hi', 'no-spam-pls': ''}))

    result = _run(['validate', str(submission)])

    assert result.exit_code == 0
    assert json.loads(result.output)['code'] == 'form_submitted'


def test_validate_reports_failure(tmp_path):
    """Test that an invalid submission prints the error envelope."""
    submission = tmp_path / 'submission.json'
    submission.write_text(json.dumps({'email': 'bad', 'message': 'hi', 'no-spam-pls': ''}))

    result = _run(['validate', str(submission)])

    assert result.exit_code == 1
    body = json.loads(result.output)
    assert body['code'] == 'invalid_email_fields'
    assert body['errors'][0]['value'] == 'bad'


def test_validate_rejects_non_object(tmp_path):
    """Test that a JSON file without an object is a usage error."""
    submission = tmp_path / 'submission.json'
    submission.write_text('[1, 2]')

    result = _run(['validate', str(submission)])

    assert result.exit_code == 2
    assert 'must contain a JSON object' in result.output


def test_serve_uses_configured_address():
    """Test that serve starts uvicorn with the configured host and port."""
    env = dict(FORM_ENV, API_HOST='127.0.0.1', API_PORT='9001')

    with patch('formulator.main.uvicorn.run') as mock_run:
        result = _run(['serve'], env=env)

    assert result.exit_code == 0
    kwargs = mock_run.call_args.kwargs
    assert kwargs['host'] == '127.0.0.1'
    assert kwargs['port'] == 9001
    assert kwargs['factory'] is True


def test_serve_port_option_overrides_environment():
    """Test that --port wins over API_PORT."""
    with patch('formulator.main.uvicorn.run') as mock_run:
        result = _run(['serve', '--port', '8123'])

    assert result.exit_code == 0
    assert mock_run.call_args.kwargs['port'] == 8123
