# risk_scanner/cli.py
import argparse
import sys
from typing import Optional

from loguru import logger
from rich.console import Console

from risk_scanner.client import HttpAnalysisClient
from risk_scanner.collector import InputCollector
from risk_scanner.config import ConfigError, load_settings
from risk_scanner.display import show
from risk_scanner.logs import configure_logging
from risk_scanner.models import AnalysisRequest
from risk_scanner.render import format_report, render, safe_json, truncate
from risk_scanner.session import AnalysisSession


class DecodeOnly:
    """Routes session submissions to the /decode endpoint."""

    def __init__(self, client: HttpAnalysisClient):
        self.client = client

    def analyze(self, request: AnalysisRequest):
        return self.client.decode(request)


class Spinner:
    """Session listener: spinner on while loading, off otherwise."""

    def __init__(self, console: Console):
        self.console = console
        self.status = None

    def __call__(self, session: AnalysisSession):
        if session.loading:
            self.status = self.console.status("ANALYZING NETWORK...")
            self.status.start()
        elif self.status is not None:
            self.status.stop()
            self.status = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="risk-scanner",
        description="Submit a transaction to the risk analysis service and show the verdict.",
    )
    parser.add_argument("--api-base", help="analysis service base URL")
    parser.add_argument("--timeout", type=float, help="request timeout in seconds")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--plain", action="store_true", help="plain text output")
    parser.add_argument("--debug", action="store_true", help="debug logs and raw result JSON")

    sub = parser.add_subparsers(dest="command")

    analyze = sub.add_parser("analyze", help="analyze one transaction")
    analyze.add_argument("target", help="contract address")
    analyze.add_argument("payload", help="call data")

    decode = sub.add_parser("decode", help="decode call data without a risk verdict")
    decode.add_argument("target", help="contract address")
    decode.add_argument("payload", help="call data")
    decode.add_argument("--abi", action="store_true", help="also print the contract ABI")

    return parser


def print_result(result, args, console: Console):
    view = render(result)

    if args.plain:
        print(format_report(view))
    else:
        show(view, console)

    if args.debug:
        print("\n--- DEBUG (raw result) ---")
        print(safe_json(result.model_dump(exclude_none=True)))
        print("--- END DEBUG ---\n")

    if getattr(args, "abi", False) and result.status == "success" and result.abi is not None:
        print("\n// CONTRACT ABI")
        print(truncate(safe_json(result.abi)))


def run_once(collector: InputCollector, target: str, payload: str, args, console: Console) -> int:
    collector.set_target(target)
    collector.set_payload(payload)

    result = collector.submit()
    if result is None:
        print("ERROR: target and payload are both required", file=sys.stderr)
        return 2

    print_result(result, args, console)
    return 0 if result.status == "success" else 1


def interactive(collector: InputCollector, args, console: Console) -> int:
    print("Enter a contract address and call data. Type 'exit' to quit.\n")

    while True:
        try:
            target = input("target> ").strip()
            if target in ("exit", "quit"):
                break
            if not target:
                continue

            payload = input("payload> ").strip()
            if payload in ("exit", "quit"):
                break
        except (KeyboardInterrupt, EOFError):
            print()
            break

        if not payload:
            print("(call data is required)\n")
            continue

        try:
            run_once(collector, target, payload, args, console)
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except Exception as e:
            print("\nERROR:", str(e), "\n")
            continue
        print()

    print("Goodbye.")
    return 0


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            args.config,
            api_base=args.api_base,
            request_timeout=args.timeout,
        )
    except (ConfigError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    try:
        configure_logging(settings.log_level, debug=args.debug)
    except ValueError as e:
        print(f"ERROR: invalid log level: {e}", file=sys.stderr)
        return 2

    logger.debug(f"Using analysis service at {settings.api_base}")

    console = Console()
    client = HttpAnalysisClient(settings.api_base, timeout=settings.request_timeout)
    session = AnalysisSession(DecodeOnly(client) if args.command == "decode" else client)
    if not args.plain:
        session.subscribe(Spinner(console))

    collector = InputCollector(session)

    if args.command in ("analyze", "decode"):
        return run_once(collector, args.target, args.payload, args, console)

    return interactive(collector, args, console)


if __name__ == "__main__":
    sys.exit(main())
