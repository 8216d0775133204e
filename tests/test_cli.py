import argparse

from conftest import APP_SOURCE

from hubdeploy.cli import main, prompt_for_missing, run_deploy
from hubdeploy.modules.hubinstall.domain import ArtifactKind
from hubdeploy.modules.hubinstall.repositories import DeployContextStore
from hubdeploy.modules.hubinstall.service import HubInstallService


def _args(path, **overrides):
    values = {"file": str(path), "hub_address": None, "kind": None, "no_input": False}
    values.update(overrides)
    return argparse.Namespace(**values)


def _service(settings, fake_hub):
    return HubInstallService(
        settings,
        store=DeployContextStore.from_settings(settings),
        orchestrator_factory=fake_hub.orchestrator,
    )


def test_prompt_fills_missing_answers_then_deploys(tmp_path, settings, fake_hub, capsys):
    source_file = tmp_path / "album.groovy"
    source_file.write_text(APP_SOURCE, encoding="utf-8")
    fake_hub.catalog("userAppTypes", [{"id": 77, "name": "File Manager Album", "namespace": "jpage4500"}])
    fake_hub.accept("POST", "/app/ideUpdate")
    asked = []

    def prompt(hub_address, kind):
        asked.append((hub_address, kind))
        return "192.168.0.200", ArtifactKind.APP

    code = run_deploy(_args(source_file), settings, prompt=prompt, service=_service(settings, fake_hub))

    assert code == 0
    assert asked == [(None, None)]
    assert "Success!" in capsys.readouterr().out
    context = DeployContextStore.from_settings(settings).load()
    assert context.hub_address == "192.168.0.200"
    assert context.kind_for_path(str(source_file.resolve())) == ArtifactKind.APP


def test_cancelled_prompt_stops(tmp_path, settings, fake_hub, capsys):
    source_file = tmp_path / "album.groovy"
    source_file.write_text(APP_SOURCE, encoding="utf-8")

    code = run_deploy(
        _args(source_file), settings, prompt=lambda hub, kind: None, service=_service(settings, fake_hub)
    )

    assert code == 1
    assert "Cancelled" in capsys.readouterr().out
    assert fake_hub.calls == []


def test_no_input_reports_missing_values(tmp_path, settings, fake_hub, capsys):
    source_file = tmp_path / "album.groovy"
    source_file.write_text(APP_SOURCE, encoding="utf-8")

    def prompt(hub_address, kind):
        raise AssertionError("should not prompt")

    code = run_deploy(
        _args(source_file, no_input=True), settings, prompt=prompt, service=_service(settings, fake_hub)
    )

    assert code == 1
    assert "Missing hub address" in capsys.readouterr().err


def test_non_artifact_file_is_rejected(tmp_path, settings, fake_hub, capsys):
    source_file = tmp_path / "notes.txt"
    source_file.write_text("just some notes", encoding="utf-8")

    code = run_deploy(_args(source_file), settings, service=_service(settings, fake_hub))

    assert code == 1
    assert "missing definition" in capsys.readouterr().err


def test_unreadable_file(tmp_path, settings, fake_hub):
    code = run_deploy(_args(tmp_path / "missing.groovy"), settings, service=_service(settings, fake_hub))

    assert code == 1


def test_prompt_for_missing_retries_invalid_answers(capsys):
    answers = iter(["not a hub!", "192.168.0.200", "widget", "driver"])

    result = prompt_for_missing(None, None, input_func=lambda _: next(answers))

    assert result == ("192.168.0.200", ArtifactKind.DRIVER)
    out = capsys.readouterr().out
    assert "Invalid hub address: not a hub!" in out
    assert "Select an app/driver type to continue" in out


def test_prompt_for_missing_blank_cancels():
    assert prompt_for_missing(None, ArtifactKind.APP, input_func=lambda _: "  ") is None


def test_prompt_for_missing_keeps_known_values():
    def never(_):
        raise AssertionError("should not ask")

    assert prompt_for_missing("10.0.0.1", ArtifactKind.APP, input_func=never) == ("10.0.0.1", ArtifactKind.APP)


def test_main_without_command_prints_help(capsys):
    assert main([]) == 1
    assert "deploy" in capsys.readouterr().out
