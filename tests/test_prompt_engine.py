# tests/test_prompt_engine.py
import pytest
from jinja2 import UndefinedError

from laris.prompts.registry import PromptRegistry, render_template


def test_render_template_basic():
    out = render_template("Hello {{ name }}", {"name": "Taylor"})
    assert out == "Hello Taylor"


def test_render_template_is_strict():
    with pytest.raises(UndefinedError):
        render_template("Hello {{ name }}", {})


def test_packaged_make_event_prompt():
    text = PromptRegistry().render("make_event", {"default_prompt": "", "event_name": "UserRegistered"})
    assert text.startswith("You are a Laravel expert.")
    assert '"UserRegistered"' in text


def test_registry_picks_latest_version(tmp_path):
    (tmp_path / "prompt_db.jsonl").write_text(
        '{"id": "p", "version": "1.10.0", "purpose": "", "template": "new"}\n'
        "\n"
        '{"id": "p", "version": "1.9.0", "purpose": "", "template": "old"}\n',
        encoding="utf-8",
    )
    reg = PromptRegistry(base_dir=str(tmp_path))
    assert reg.get_prompt("p").template == "new"
    assert reg.get_prompt("p", "1.9.0").template == "old"
    with pytest.raises(KeyError):
        reg.get_prompt("missing")
