# tests/test_cli.py
import json

import pytest
from conftest import FakeRunner, probe_output

from laris.ai.config import CONFIG_FILE, load_ai_config
from laris.artisan import ArtisanTimeout
from laris.ai.llm import LLMTimeout
from laris.cli import ai_config, ai_make_event, performance
from laris.observability import list_events
from laris.report import NO_ISSUES


@pytest.fixture
def fake_runner(monkeypatch):
    """Route performance CLI subprocess calls to a FakeRunner built per project root."""
    state = {"probe": probe_output(), "artisan": {}}

    def factory(root):
        runner = FakeRunner(root, artisan=state["artisan"], probe=state["probe"])
        state["runner"] = runner
        return runner

    monkeypatch.setattr(performance, "ArtisanRunner", factory)
    return state


# ---- laris-performance ----

def test_performance_outside_project(tmp_path, capsys):
    assert performance.main(["--path", str(tmp_path)]) == 1
    assert "Laravel project" in capsys.readouterr().out


def test_performance_healthy_project(tuned_project, fake_runner, capsys):
    rc = performance.main(["--path", str(tuned_project)])
    out = capsys.readouterr().out
    assert rc == 0
    assert "System Information" in out
    assert "Laravel Application" in out
    assert "Route Analysis" not in out
    assert NO_ISSUES in out
    assert "Performance analysis completed" in out


def test_performance_reports_recommendations(laravel_project, fake_runner, capsys):
    fake_runner["probe"] = probe_output(opcache_enabled=False)
    (laravel_project / ".env").write_text("APP_ENV=production\nAPP_DEBUG=true\n", encoding="utf-8")
    assert performance.main(["--path", str(laravel_project)]) == 0
    out = capsys.readouterr().out
    assert "🚨 [System] Enable OPcache for better PHP performance" in out
    assert "🚨 [Security] Debug mode is enabled in production" in out
    assert "Action: Run: php artisan config:cache" in out
    assert NO_ISSUES not in out


def test_performance_detailed_with_failing_section(tuned_project, fake_runner, capsys):
    fake_runner["artisan"][("route:list", "--json")] = ArtisanTimeout(["php", "artisan", "route:list", "--json"], 60)
    assert performance.main(["--path", str(tuned_project), "--detailed"]) == 0
    out = capsys.readouterr().out
    assert "Database Information" in out
    assert "Memory Usage" in out
    assert "! Could not analyze routes: Timed out after 60s" in out
    statuses = [(e["action"], e["status"]) for e in list_events()]
    assert ("collect", "error") in statuses
    assert statuses[-1] == ("performance", "ok")


def test_performance_export_csv(tuned_project, fake_runner, tmp_path, monkeypatch, capsys):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    monkeypatch.chdir(out_dir)
    assert performance.main(["--path", str(tuned_project), "--memory", "--export=csv"]) == 0
    files = list(out_dir.glob("laris-performance-*.csv"))
    assert len(files) == 1
    assert "Results exported to" in capsys.readouterr().out
    assert "memory,peak_usage,1 MB" in files[0].read_text(encoding="utf-8")


def test_performance_export_defaults_to_json(tuned_project, fake_runner, monkeypatch):
    monkeypatch.chdir(tuned_project)
    assert performance.main(["--export"]) == 0
    files = list(tuned_project.glob("laris-performance-*.json"))
    assert len(files) == 1
    data = json.loads(files[0].read_text(encoding="utf-8"))
    assert set(data) == {"system", "application"}


def test_performance_rejects_unknown_export_format(tuned_project, fake_runner, monkeypatch, capsys):
    monkeypatch.chdir(tuned_project)
    with pytest.raises(SystemExit) as exc:
        performance.main(["--export=xml"])
    assert exc.value.code == 2
    assert "invalid choice" in capsys.readouterr().err
    assert not list(tuned_project.glob("laris-performance-*"))
    assert "runner" not in fake_runner


# ---- laris-ai-config / laris-ai-make-event ----

def test_ai_config_writes_file(laravel_project, capsys):
    rc = ai_config.main(["--path", str(laravel_project), "--api-key", "sk-or-1", "--max-tokens", "800"])
    assert rc == 0
    cfg = load_ai_config(laravel_project)
    assert cfg.api_key == "sk-or-1"
    assert cfg.max_tokens == 800

    assert ai_config.main(["--path", str(laravel_project), "--model", "openai/gpt-4o-mini"]) == 0
    cfg = load_ai_config(laravel_project)
    assert cfg.api_key == "sk-or-1"
    assert cfg.model == "openai/gpt-4o-mini"


def test_ai_config_requires_key(laravel_project, monkeypatch, capsys):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    assert ai_config.main(["--path", str(laravel_project)]) == 1
    assert "api_key" in capsys.readouterr().out
    assert not (laravel_project / CONFIG_FILE).exists()


class FakeGenerator:
    source = "<?php\n\nnamespace App\\Events;\n\nclass OrderShipped {}\n"
    error = None

    def __init__(self, config):
        self.config = config

    def generate(self, event_name):
        if self.error:
            raise self.error
        return self.source


@pytest.fixture
def configured_project(laravel_project, monkeypatch):
    (laravel_project / CONFIG_FILE).write_text(
        json.dumps({"provider": "openrouter", "api_key": "sk-or-1"}), encoding="utf-8"
    )
    monkeypatch.setattr(ai_make_event, "EventGenerator", FakeGenerator)
    return laravel_project


def test_make_event_saves_verbatim(configured_project, capsys):
    rc = ai_make_event.main(["OrderShipped", "--yes", "--path", str(configured_project)])
    assert rc == 0
    target = configured_project / "app" / "Events" / "OrderShipped.php"
    assert target.read_text(encoding="utf-8") == FakeGenerator.source
    assert "Event saved to app/Events/OrderShipped.php" in capsys.readouterr().out


def test_make_event_interactive(configured_project, monkeypatch):
    answers = iter(["", "n"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert ai_make_event.main(["--path", str(configured_project)]) == 0
    assert not (configured_project / "app" / "Events" / "ExampleEvent.php").exists()
    assert list_events()[-1]["status"] == "skip"


def test_make_event_refuses_overwrite(configured_project):
    events = configured_project / "app" / "Events"
    events.mkdir(parents=True)
    (events / "OrderShipped.php").write_text("keep me", encoding="utf-8")
    assert ai_make_event.main(["OrderShipped", "--yes", "--path", str(configured_project)]) == 1
    assert (events / "OrderShipped.php").read_text(encoding="utf-8") == "keep me"
    assert ai_make_event.main(["OrderShipped", "--yes", "--force", "--path", str(configured_project)]) == 0
    assert (events / "OrderShipped.php").read_text(encoding="utf-8") == FakeGenerator.source


def test_make_event_invalid_name(configured_project, capsys):
    assert ai_make_event.main(["order-shipped", "--yes", "--path", str(configured_project)]) == 1
    assert "StudlyCase" in capsys.readouterr().out


def test_make_event_missing_config(laravel_project, capsys):
    assert ai_make_event.main(["OrderShipped", "--yes", "--path", str(laravel_project)]) == 1
    assert "laris-ai-config" in capsys.readouterr().out


def test_make_event_outside_project(tmp_path):
    assert ai_make_event.main(["OrderShipped", "--path", str(tmp_path)]) == 1


def test_make_event_api_timeout(configured_project, monkeypatch, capsys):
    monkeypatch.setattr(FakeGenerator, "error", LLMTimeout("OpenRouter did not answer within 120s"))
    assert ai_make_event.main(["OrderShipped", "--yes", "--path", str(configured_project)]) == 1
    assert "did not answer" in capsys.readouterr().out
    assert not (configured_project / "app" / "Events").exists()


def test_performance_survives_unwritable_audit_log(tuned_project, fake_runner, tmp_path, monkeypatch, capsys):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setenv("LARIS_AUDIT_LOG", str(blocker / "audit.log.jsonl"))
    assert performance.main(["--path", str(tuned_project)]) == 0
    out = capsys.readouterr().out
    assert "! audit log not written" in out
    assert "Performance analysis completed" in out


def test_make_event_reports_malformed_response(configured_project, monkeypatch, capsys):
    from laris.ai.llm import LLMError

    monkeypatch.setattr(FakeGenerator, "error", LLMError("OpenRouter response has no message content"))
    assert ai_make_event.main(["OrderShipped", "--yes", "--path", str(configured_project)]) == 1
    assert "Failed to get response from OpenRouter" in capsys.readouterr().out
    assert not (configured_project / "app" / "Events").exists()


def _closed_stdin(prompt=""):
    raise EOFError


def test_make_event_without_stdin_for_name(configured_project, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", _closed_stdin)
    assert ai_make_event.main(["--path", str(configured_project)]) == 1
    assert "pass the event name" in capsys.readouterr().out


def test_make_event_without_stdin_for_confirmation(configured_project, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", _closed_stdin)
    assert ai_make_event.main(["OrderShipped", "--path", str(configured_project)]) == 1
    assert "--yes" in capsys.readouterr().out
    assert not (configured_project / "app" / "Events" / "OrderShipped.php").exists()


def test_make_event_write_failure(configured_project, monkeypatch, capsys):
    def denied(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(ai_make_event, "write_event", denied)
    assert ai_make_event.main(["OrderShipped", "--yes", "--path", str(configured_project)]) == 1
    assert "Permission denied" in capsys.readouterr().out
    assert list_events()[-1]["status"] == "error"
