"""Tests for the settings sub-commands (view, get, set, reset)."""

import json

from typer.testing import CliRunner

from focustimer_cli.commands.config import app
from focustimer_cli.models.timer.state import STATE_KEY

runner = CliRunner()


class TestViewAndGet:
    def test_view_json(self, patch_timer_service):
        result = runner.invoke(app, ["view", "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["focusMinutes"] == 25
        assert data["longBreakInterval"] == 4

    def test_get(self, patch_timer_service, store):
        store.set("shortBreakMinutes", 8)

        result = runner.invoke(app, ["get", "shortBreakMinutes"])

        assert result.exit_code == 0
        assert result.output.strip() == "8"

    def test_get_unknown(self, patch_timer_service):
        result = runner.invoke(app, ["get", "volume"])

        assert result.exit_code == 2
        assert "Unknown setting 'volume'" in result.output


class TestSet:
    def test_set_persists_and_retargets_idle_timer(self, patch_timer_service, store):
        result = runner.invoke(app, ["set", "focusMinutes", "40"])

        assert result.exit_code == 0, result.output
        assert "set to '40'" in result.output
        assert store.get("focusMinutes") == 40
        assert store.get(STATE_KEY)["remaining_seconds"] == 2400

    def test_set_clamps_with_warning(self, patch_timer_service, store):
        result = runner.invoke(app, ["set", "focusMinutes", "500"])

        assert result.exit_code == 0
        assert "using 120" in result.output
        assert store.get("focusMinutes") == 120

    def test_set_bool_word_without_warning(self, patch_timer_service, store):
        result = runner.invoke(app, ["set", "autoStartNext", "yes"])

        assert result.exit_code == 0
        assert "not valid" not in result.output
        assert store.get("autoStartNext") is True

    def test_set_unparseable_number_uses_default(self, patch_timer_service, store):
        result = runner.invoke(app, ["set", "focusMinutes", "\u00b2"])

        assert result.exit_code == 0, result.output
        assert "using 25" in result.output
        assert store.get("focusMinutes") == 25

    def test_set_unknown(self, patch_timer_service):
        result = runner.invoke(app, ["set", "volume", "3"])

        assert result.exit_code == 2


class TestReset:
    def test_reset_key(self, patch_timer_service, store):
        runner.invoke(app, ["set", "focusMinutes", "40"])

        result = runner.invoke(app, ["reset", "focusMinutes", "--yes"])

        assert result.exit_code == 0
        assert store.get("focusMinutes") == 25

    def test_reset_all_confirmed(self, patch_timer_service, store):
        runner.invoke(app, ["set", "language", "zh"])

        result = runner.invoke(app, ["reset"], input="y\n")

        assert result.exit_code == 0
        assert store.get("language") == "en"

    def test_reset_cancelled(self, patch_timer_service, store):
        runner.invoke(app, ["set", "language", "zh"])

        result = runner.invoke(app, ["reset"], input="n\n")

        assert "Cancelled" in result.output
        assert store.get("language") == "zh"

    def test_reset_unknown(self, patch_timer_service):
        result = runner.invoke(app, ["reset", "volume", "-y"])

        assert result.exit_code == 2
