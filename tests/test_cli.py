"""CLI tests for the stamper command group."""

import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from stamper.cli import cli
from stamper.models import variants as variants_model
from stamper.services import version_stamper


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def flavors(monkeypatch):
    registry = {
        'play': variants_model.Flavor('play', 'com.example.app.play'),
        'oss': variants_model.Flavor('oss', 'com.example.app.oss'),
    }
    monkeypatch.setattr(variants_model, 'FLAVORS', registry)
    return registry


class TestStampCommand:
    def test_release_properties(self, runner):
        result = runner.invoke(cli, ['stamp', '--variant', 'release', '--at', '2024-10-03T14:05:09Z',
                                     '--format', 'properties'])
        assert result.exit_code == 0, result.output
        assert result.stdout == "versionCode=20241003\nversionName=2024.10.03\n"

    def test_debug_json(self, runner):
        result = runner.invoke(cli, ['stamp', '-v', 'ossDebug', '--at', '2024-10-03T14:05:09Z', '-f', 'json'])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {
            'versionCode': 20241003,
            'versionName': '2024.10.03 14:05:09 UTC',
        }

    def test_env_format(self, runner):
        result = runner.invoke(cli, ['stamp', '-v', 'debug', '--at', '2024-01-01T00:00:00Z', '-f', 'env'])
        assert result.exit_code == 0, result.output
        assert result.stdout == "VERSION_CODE=20240101\nVERSION_NAME='2024.01.01 00:00:00 UTC'\n"

    def test_reads_clock_once(self, runner):
        fixed = datetime(2024, 10, 3, 14, 5, 9, tzinfo=timezone.utc)
        with patch.object(version_stamper, 'capture_instant', return_value=fixed) as clock:
            result = runner.invoke(cli, ['stamp', '-v', 'debug', '-f', 'properties'])
        assert result.exit_code == 0, result.output
        clock.assert_called_once_with()
        assert "versionName=2024.10.03 14:05:09 UTC" in result.stdout

    def test_writes_output_file(self, runner, tmp_path):
        target = tmp_path / 'out' / 'version.properties'
        result = runner.invoke(cli, ['stamp', '-v', 'release', '--at', '2024-10-03T14:05:09Z',
                                     '-f', 'properties', '-o', str(target)])
        assert result.exit_code == 0, result.output
        assert "versionCode" not in result.stdout
        assert target.read_text(encoding='utf-8') == "versionCode=20241003\nversionName=2024.10.03\n"

    def test_unwritable_output_exits_1(self, runner, tmp_path):
        blocker = tmp_path / 'blocker'
        blocker.write_text("not a directory\n", encoding='utf-8')
        result = runner.invoke(cli, ['stamp', '-v', 'release', '--at', '2024-10-03T14:05:09Z',
                                     '-o', str(blocker / 'x.properties')])
        assert result.exit_code == 1
        assert "Cannot write" in result.output

    def test_naive_instant_is_usage_error(self, runner):
        result = runner.invoke(cli, ['stamp', '--at', '2024-10-03T14:05:09'])
        assert result.exit_code == 2
        assert "--at" in result.output

    def test_unknown_variant_is_usage_error(self, runner):
        result = runner.invoke(cli, ['stamp', '-v', 'playProfile', '--at', '2024-10-03T14:05:09Z'])
        assert result.exit_code == 2
        assert "--variant" in result.output

    def test_unknown_format_is_rejected(self, runner):
        result = runner.invoke(cli, ['stamp', '-f', 'xml', '--at', '2024-10-03T14:05:09Z'])
        assert result.exit_code == 2


class TestPassCommand:
    def test_default_pass_json(self, runner):
        result = runner.invoke(cli, ['pass', '--at', '2024-10-03T14:05:09Z'])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert list(payload['variants']) == ['playRelease', 'playDebug', 'ossRelease', 'ossDebug']
        assert payload['variants']['playRelease'] == {'versionCode': 20241003, 'versionName': '2024.10.03'}

    def test_selected_variants_properties(self, runner):
        result = runner.invoke(cli, ['pass', '-v', 'release', '-v', 'debug', '--at', '2024-10-03T14:05:09Z',
                                     '-f', 'properties'])
        assert result.exit_code == 0, result.output
        assert result.stdout == (
            "release.versionCode=20241003\n"
            "release.versionName=2024.10.03\n"
            "debug.versionCode=20241003\n"
            "debug.versionName=2024.10.03 14:05:09 UTC\n"
        )

    def test_pass_rejects_bad_variant(self, runner):
        result = runner.invoke(cli, ['pass', '-v', 'nightly', '--at', '2024-10-03T14:05:09Z'])
        assert result.exit_code == 2


def test_version_option(runner):
    result = runner.invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert "stamper" in result.output


def test_serve_runs_app(runner):
    with patch('stamper.cli.app') as app:
        result = runner.invoke(cli, ['serve', '--host', '0.0.0.0', '--port', '8080'])
    assert result.exit_code == 0, result.output
    app.run.assert_called_once_with(host='0.0.0.0', port=8080)
