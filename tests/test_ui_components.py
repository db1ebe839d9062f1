"""
File: tests/test_ui_components.py
Tests for the Rich renderer and the JSON exporter.
"""
import json

from rich.console import Console

from adapters.json_exporter import export_entities_json
from cli.ui_components import IMAGE_PLACEHOLDER, EventRenderer, build_entity_panel
from core.domain.events import ControllerEvent, EventKind
from core.domain.models import Entity

FOX = Entity(id=1, name="Fox", image="http://img.test/fox.png", votes=3)


def make_renderer(**kwargs):
    console = Console(record=True, width=100)
    return EventRenderer(console, server_url="http://testserver/characters", **kwargs), console


def test_panel_placeholder_for_blank_image():
    console = Console(record=True, width=80)
    console.print(build_entity_panel(Entity(id=9, name="Ghost", image="  ")))
    text = console.export_text()
    assert IMAGE_PLACEHOLDER in text
    assert "0 votes" in text


def test_renderer_marks_failures():
    renderer, console = make_renderer()
    renderer(ControllerEvent(kind=EventKind.LIST_LOADED, entities=(FOX,)))
    assert renderer.failed is False

    renderer(ControllerEvent(kind=EventKind.DETAIL_LOAD_FAILED, error="detail failed"))
    assert renderer.failed is True
    assert "Failed to load animal details" in console.export_text()


def test_renderer_can_skip_list():
    renderer, console = make_renderer(render_list=False)
    renderer(ControllerEvent(kind=EventKind.LIST_LOADED, entities=(FOX,)))
    assert "Fox" not in console.export_text()


def test_renderer_list_failure_names_server():
    renderer, console = make_renderer()
    renderer(ControllerEvent(kind=EventKind.LIST_LOAD_FAILED, error="list failed"))
    assert "http://testserver/characters" in console.export_text()


def test_export_entities_json(tmp_path):
    out = export_entities_json(entities=[FOX], output_path=tmp_path / "db.json", resource="animals")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data == {
        "animals": [{"id": 1, "name": "Fox", "image": "http://img.test/fox.png", "votes": 3}]
    }
