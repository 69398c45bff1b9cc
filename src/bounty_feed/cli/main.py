"""Main CLI entry point."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(prog="bounty-feed", description="Multi-source gig and opportunity feed")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings YAML (default: environment variables only)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # search
    search_parser = subparsers.add_parser("search", help="Search sources concurrently")
    search_parser.add_argument("query", help="Free-text query, e.g. 'web design'")
    search_parser.add_argument(
        "--sources",
        type=str,
        default=None,
        help="Comma-separated source tags (default: configured default sources)",
    )
    search_parser.add_argument("--limit", type=int, default=None, help="Max records per source")
    search_parser.add_argument("--min-budget", type=float, default=None)
    search_parser.add_argument("--max-budget", type=float, default=None)
    search_parser.add_argument(
        "--language",
        type=str,
        default="en",
        help="ISO 639-1 code, or 'any' to disable the language filter (default: en)",
    )
    search_parser.add_argument(
        "--location",
        type=str,
        default=None,
        help="City/region for location-aware sources (bountyboard)",
    )
    search_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write merged records JSON to file (default: stdout)",
    )
    search_parser.add_argument(
        "--store",
        type=Path,
        default=None,
        metavar="DB_PATH",
        help="Add results as pending curated records in SQLite store",
    )
    search_parser.add_argument("--tenant", type=str, default="default", help="Tenant for --store")

    # sources
    subparsers.add_parser("sources", help="List registered source tags")

    # analyze
    analyze_parser = subparsers.add_parser("analyze", help="Scan one business website for opportunities")
    analyze_parser.add_argument("url", help="Business website URL")
    analyze_parser.add_argument("--name", type=str, default=None, help="Business name (default: from domain)")

    # curated
    curated_parser = subparsers.add_parser("curated", help="Manage curated records")
    curated_parser.add_argument(
        "action",
        choices=["list", "set-status"],
        help="List curated records or change one record's status",
    )
    curated_parser.add_argument(
        "--db",
        type=Path,
        default=Path("bounty_feed.db"),
        help="Path to SQLite database",
    )
    curated_parser.add_argument("--tenant", type=str, default="default")
    curated_parser.add_argument(
        "--status",
        type=str,
        default=None,
        choices=["pending", "approved", "rejected", "hidden"],
        help="Filter (list) or new status (set-status)",
    )
    curated_parser.add_argument("--id", type=str, default=None, help="Curated record id (for set-status)")
    curated_parser.add_argument("--notes", type=str, default=None)
    curated_parser.add_argument("--reward", type=str, default=None, help="Custom reward text")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "search":
        _run_search(args)
    elif args.command == "sources":
        _run_sources(args)
    elif args.command == "analyze":
        _run_analyze(args)
    elif args.command == "curated":
        _run_curated(args)
    else:
        parser.print_help()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _load_settings(args: argparse.Namespace):
    from bounty_feed.config import FeedSettings

    if args.config is not None:
        return FeedSettings.from_yaml(args.config)
    return FeedSettings.from_env()


def _run_search(args: argparse.Namespace) -> None:
    """Run search command."""
    from bounty_feed.connectors.registry import build_default_registry
    from bounty_feed.models.record import SearchOptions
    from bounty_feed.pipeline import failed_sources, flatten_records, search

    settings = _load_settings(args)
    sources = [s.strip().lower() for s in args.sources.split(",") if s.strip()] if args.sources else None
    language = None if args.language.lower() == "any" else args.language.lower()
    options = SearchOptions(
        limit=args.limit,
        min_budget=args.min_budget,
        max_budget=args.max_budget,
        language=language,
        location=args.location,
    )

    results = search(
        args.query,
        sources,
        options,
        registry=build_default_registry(settings),
        settings=settings,
    )
    for result in results:
        status = f"{len(result.records)} records" if result.success else f"FAILED: {result.error}"
        print(f"  {result.source}: {status}", file=sys.stderr)
    failures = failed_sources(results)
    if failures and len(failures) == len(results):
        print("All sources failed.", file=sys.stderr)

    records = flatten_records(results)

    if args.store is not None:
        from bounty_feed.models.record import utc_now_iso
        from bounty_feed.store import SavedSearch, SqliteCurationStore

        store = SqliteCurationStore(args.store)
        for record in records:
            store.add(args.tenant, record)
        store.save_search(
            SavedSearch(
                tenant_id=args.tenant,
                query=args.query,
                sources=[r.source for r in results],
                options=options,
                last_run=utc_now_iso(),
            )
        )
        print(f"Store: {len(records)} records added as pending for {args.tenant}", file=sys.stderr)

    output = json.dumps([r.model_dump(mode="json") for r in records], indent=2, default=str)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote {len(records)} records to {args.output}", file=sys.stderr)
    else:
        print(output)


def _run_sources(args: argparse.Namespace) -> None:
    """Run sources command."""
    from bounty_feed.connectors.registry import build_default_registry

    registry = build_default_registry(_load_settings(args))
    for tag in registry.available_sources():
        connector = registry.get(tag)
        problem = connector.configuration_error()
        suffix = f"  (not configured: {problem})" if problem else ""
        print(f"{tag}{suffix}")


def _run_analyze(args: argparse.Namespace) -> None:
    """Run analyze command."""
    from bounty_feed.opportunities.discovery import analyze_business_by_url
    from bounty_feed.opportunities.website import WebsiteScanner

    settings = _load_settings(args)
    scanner = WebsiteScanner(
        timeout=settings.website_timeout,
        accessibility_timeout=settings.accessibility_timeout,
        user_agent=settings.user_agent,
    )
    lead = asyncio.run(analyze_business_by_url(args.url, scanner, name=args.name))
    if lead is None:
        print(f"Could not access {args.url}", file=sys.stderr)
        raise SystemExit(1)
    print(json.dumps(lead.model_dump(mode="json", exclude={"reviews"}), indent=2, default=str))


def _run_curated(args: argparse.Namespace) -> None:
    """Run curated command."""
    from bounty_feed.store import SqliteCurationStore

    store = SqliteCurationStore(args.db)
    if args.action == "list":
        curated = store.list_curated(args.tenant, status=args.status)
        print(json.dumps([c.model_dump(mode="json") for c in curated], indent=2, default=str))
    elif args.action == "set-status":
        if not args.id or not args.status:
            raise SystemExit("curated set-status requires --id and --status")
        updated = store.update(args.id, status=args.status, notes=args.notes, custom_reward=args.reward)
        if updated is None:
            raise SystemExit(f"Unknown curated record: {args.id}")
        print(f"{updated.id}: {updated.status}")


if __name__ == "__main__":
    main()
