"""llmcatalog CLI entrypoint."""

import argparse
import sys
from typing import List, Optional

from prettytable import PrettyTable

from llmcatalog._internal.exceptions import InitializationTimeoutError
from llmcatalog.bootstrap import build_cache, initialize_discovery
from llmcatalog.core.config import CatalogConfig, load_config
from llmcatalog.models.discovery.cascade import DiscoveryCascade
from llmcatalog.models.discovery.registry import default_registry
from llmcatalog.models.discovery.state import DetailedReport, GlobalStatus
from llmcatalog.utils.logging import configure_logging


def _load(args: argparse.Namespace) -> CatalogConfig:
    config = load_config(args.config)
    configure_logging(
        args.log_level or config.logging.level,
        verbose=args.verbose,
        components=config.logging.components,
    )
    return config


def render_report(report: DetailedReport) -> str:
    table = PrettyTable()
    table.field_names = ["Provider", "Status", "Progress", "Models", "Elapsed (ms)", "Detail"]
    table.align = "l"
    for name, state in sorted(report.interfaces.items()):
        table.add_row(
            [
                name,
                state.status.value,
                f"{state.progress}%",
                state.models_count,
                state.elapsed_ms,
                state.error or state.message,
            ]
        )

    summary = report.global_state
    return (
        f"{table}\n"
        f"Status: {summary.status.value} "
        f"({summary.completed_interfaces} completed, {summary.failed_interfaces} failed, "
        f"{summary.total_interfaces} total, {summary.total_models} models)"
    )


def cmd_discover(args: argparse.Namespace) -> int:
    config = _load(args)
    monitor = initialize_discovery(config, providers=args.provider or None)

    try:
        report = monitor.wait_for_all_interfaces(timeout_ms=args.timeout)
    except InitializationTimeoutError as e:
        print(render_report(monitor.get_detailed_report()))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(render_report(report))
    return 1 if report.global_state.status is GlobalStatus.FAILED else 0


def cmd_models(args: argparse.Namespace) -> int:
    config = _load(args)
    settings = config.get_provider(args.provider)
    if settings is None:
        print(f"Provider '{args.provider}' is not configured", file=sys.stderr)
        return 1

    strategies = default_registry()
    cascade = DiscoveryCascade(
        args.provider,
        settings,
        cache=build_cache(config),
        strategy=strategies.get(settings.strategy or args.provider),
    )
    records = cascade.available_models()

    table = PrettyTable()
    table.field_names = ["Model ID", "Chat", "Streaming", "Embeddings", "Vision", "Audio", "Extras"]
    table.align = "l"
    for record in records:
        caps = record.capabilities
        table.add_row(
            [
                record.id,
                caps.chat,
                caps.streaming,
                caps.embeddings,
                caps.vision,
                caps.audio,
                ", ".join(caps.extras),
            ]
        )

    print(f"Available {args.provider} models ({len(records)}):")
    print(table)
    return 0


def cmd_providers(args: argparse.Namespace) -> int:
    config = _load(args)

    table = PrettyTable()
    table.field_names = ["Provider", "Endpoint", "Aliases", "API key"]
    table.align = "l"
    for name, settings in sorted(config.providers.items()):
        table.add_row(
            [
                name,
                settings.models_endpoint or "(static)",
                settings.alias_count,
                "configured" if settings.api_key else "-",
            ]
        )
    print(table)
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    import llmcatalog

    print(f"llmcatalog {llmcatalog.__version__}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llmcatalog", description="Discover the models offered by configured LLM providers"
    )
    parser.add_argument("--config", help="Path to a YAML configuration file")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging, including HTTP"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Discover command
    discover_parser = subparsers.add_parser("discover", help="Run model discovery")
    discover_parser.add_argument(
        "--provider",
        action="append",
        help="Provider to discover (repeatable); all configured providers by default",
    )
    discover_parser.add_argument(
        "--timeout", type=int, default=30_000, help="Maximum wait in milliseconds"
    )
    discover_parser.set_defaults(func=cmd_discover)

    # Models command
    models_parser = subparsers.add_parser(
        "models", help="List cached or statically configured models for a provider"
    )
    models_parser.add_argument("provider", help="Provider name")
    models_parser.set_defaults(func=cmd_models)

    # Providers command
    providers_parser = subparsers.add_parser("providers", help="List configured providers")
    providers_parser.set_defaults(func=cmd_providers)

    # Version command
    version_parser = subparsers.add_parser("version", help="Show version")
    version_parser.set_defaults(func=cmd_version)

    parser.set_defaults(func=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code for the shell
            - 0: Success
            - 1: General error or discovery timeout
            - 2: Incorrect usage (shows help)
            - 130: Interrupted by user (Ctrl+C)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.func is None:
        parser.print_help()
        return 2

    try:
        return int(args.func(args))
    except KeyboardInterrupt:
        print("\nOperation cancelled.")
        return 130
    except SystemExit as e:
        return int(e.code) if isinstance(e.code, int) else 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
