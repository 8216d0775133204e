"""Command line front-end.

Examples::

    hubdeploy deploy drivers/FileManagerDevice.groovy
    hubdeploy deploy MyApp.groovy --hub 192.168.0.200 --type app
    hubdeploy context
    hubdeploy serve --port 8000
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from hubdeploy.bootstrap import ServiceContainer
from hubdeploy.logging_config import configure_logging
from hubdeploy.modules.hubinstall.domain import ArtifactKind, AwaitingInput
from hubdeploy.modules.hubinstall.repositories import DeployContextStore
from hubdeploy.modules.hubinstall.resolve import is_valid_hub_address
from hubdeploy.modules.hubinstall.service import HubInstallService, InvalidDeployInput
from hubdeploy.settings import Settings, get_settings

PromptAnswer = Optional[Tuple[str, ArtifactKind]]
Prompt = Callable[[Optional[str], Optional[ArtifactKind]], PromptAnswer]


def prompt_for_missing(
    known_hub_address: Optional[str],
    known_kind: Optional[ArtifactKind],
    input_func: Callable[[str], str] = input,
) -> PromptAnswer:
    """Ask for whatever resolution could not settle; ``None`` means cancelled."""
    hub_address = known_hub_address
    while not hub_address:
        answer = input_func("Hub IP address (blank to cancel): ").strip()
        if not answer:
            return None
        if is_valid_hub_address(answer):
            hub_address = answer
        else:
            print(f"Invalid hub address: {answer}")

    kind = known_kind
    while kind is None:
        answer = input_func("Is this an app or a driver? [app/driver, blank to cancel]: ").strip()
        if not answer:
            return None
        kind = ArtifactKind.parse(answer)
        if kind is None:
            print("Select an app/driver type to continue")
    return hub_address, kind


def setup_parser(parser: argparse.ArgumentParser) -> None:
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    deploy_parser = subparsers.add_parser("deploy", help="Install or update a source file on the hub")
    deploy_parser.add_argument("file", help="App or driver source file")
    deploy_parser.add_argument("--hub", dest="hub_address", help="Hub address (IP or host[:port])")
    deploy_parser.add_argument("--type", dest="kind", choices=["app", "driver"], help="Artifact type")
    deploy_parser.add_argument("--no-input", action="store_true", help="Never prompt; fail when unresolved")

    subparsers.add_parser("context", help="Show the remembered hub address and file types")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)


def run_deploy(
    args: argparse.Namespace,
    settings: Settings,
    prompt: Prompt = prompt_for_missing,
    service: Optional[HubInstallService] = None,
) -> int:
    path = Path(args.file)
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Cannot read {path}: {exc}", file=sys.stderr)
        return 1

    service = service or ServiceContainer(settings).hubinstall_service
    file_path = str(path.resolve())
    hub_address = args.hub_address
    kind = ArtifactKind.parse(args.kind)
    try:
        report = service.deploy(
            source=source, file_path=file_path, hub_address=hub_address, kind=kind, status_callback=print
        )
        if isinstance(report.outcome, AwaitingInput) and not args.no_input:
            answer = prompt(report.outcome.hub_address, report.outcome.kind)
            if answer is None:
                print("Cancelled")
                return 1
            hub_address, kind = answer
            report = service.deploy(
                source=source, file_path=file_path, hub_address=hub_address, kind=kind, status_callback=print
            )
    except InvalidDeployInput as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if isinstance(report.outcome, AwaitingInput):
        print(report.outcome.message, file=sys.stderr)
    return 0 if report.ok else 1


def run_context(settings: Settings) -> int:
    store = DeployContextStore.from_settings(settings)
    print(json.dumps(DeployContextStore.to_payload(store.load()), indent=2))
    return 0


def run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("hubdeploy.main:app", host=args.host, port=args.port)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hubdeploy",
        description="Deploy app and device-driver source to a hub",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    setup_parser(parser)
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = get_settings()
    configure_logging(settings.log_level)

    if args.command == "deploy":
        return run_deploy(args, settings)
    if args.command == "context":
        return run_context(settings)
    if args.command == "serve":
        return run_serve(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
