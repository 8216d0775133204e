import json

from conftest import build_settings

from hubdeploy.modules.hubinstall.domain import ArtifactKind, DeployContext
from hubdeploy.modules.hubinstall.repositories import DeployContextStore


def test_missing_file_gives_empty_context_with_default_hub(tmp_path):
    store = DeployContextStore.from_settings(build_settings(tmp_path, default_hub_address="10.0.0.2"))

    context = store.load()

    assert context.hub_address == "10.0.0.2"
    assert context.path_kinds == {}


def test_saved_answers_are_loaded_back(tmp_path):
    store = DeployContextStore(tmp_path / "nested" / "context.json")
    context = DeployContext()
    context.remember("/src/thing.groovy", hub_address="192.168.0.200", kind=ArtifactKind.DRIVER)

    store.save(context)
    loaded = store.load()

    assert loaded == context
    saved = json.loads((tmp_path / "nested" / "context.json").read_text(encoding="utf-8"))
    assert saved == {"hub_address": "192.168.0.200", "path_kinds": {"/src/thing.groovy": "driver"}}


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "context.json"
    path.write_text("{not json", encoding="utf-8")

    assert DeployContextStore(path).load() == DeployContext()


def test_unknown_kind_values_are_dropped(tmp_path):
    path = tmp_path / "context.json"
    path.write_text(json.dumps({"path_kinds": {"/a.groovy": "app", "/b.groovy": "library"}}), encoding="utf-8")

    assert DeployContextStore(path).load().path_kinds == {"/a.groovy": ArtifactKind.APP}


def test_remember_ignores_missing_values():
    context = DeployContext(hub_address="10.0.0.1")
    context.remember(None, hub_address=None, kind=ArtifactKind.APP)

    assert context.hub_address == "10.0.0.1"
    assert context.path_kinds == {}
