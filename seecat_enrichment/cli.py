"""Command-line entry point for material enrichment and catalog lookups."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from seecat_enrichment.core.config import Settings, get_settings
from seecat_enrichment.core.exceptions import EnrichmentError, MissingParameterError
from seecat_enrichment.core.logging import configure_logging, get_logger
from seecat_enrichment.orchestrator import EnrichmentPipeline, run_with_retry

LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seecat", description=__doc__)
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override the configured log level.")
    parser.add_argument("--indent", type=int, default=None, help="Pretty-print JSON output with this indent.")
    parser.add_argument("--plain-logs", action="store_true", help="Human-readable log lines instead of JSON.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    enrich = subparsers.add_parser("enrich", help="Enrich and classify one material name against a category.")
    enrich.add_argument("--material-name", "-m", help="Free-text material name.")
    enrich.add_argument("--category-code", "-c", help="Target category identifier.")

    attributes = subparsers.add_parser("attributes", help="List a category's attribute names.")
    attributes.add_argument("--category-code", "-c", help="Target category identifier.")

    identity = subparsers.add_parser("identity", help="Show the NOUN/MODIFIER values configured for a category.")
    identity.add_argument("--category-code", "-c", help="Target category identifier.")

    category = subparsers.add_parser("category", help="Print the raw catalog payload (all categories without an id).")
    category.add_argument("--category-code", "-c", help="Optional category identifier.")

    search = subparsers.add_parser("taxonomy-search", help="Prefix search over taxonomy codes.")
    search.add_argument("--code", help="Code prefix, e.g. 3116.")
    return parser


def build_pipeline(settings: Settings) -> EnrichmentPipeline:
    return EnrichmentPipeline.from_settings(settings)


def _dispatch(pipeline: EnrichmentPipeline, args: argparse.Namespace, settings: Settings) -> Any:
    if args.command == "enrich":
        record = run_with_retry(pipeline.enrich, args.material_name, args.category_code, settings=settings)
        return record.as_dict()
    if args.command == "attributes":
        return run_with_retry(pipeline.attribute_names, args.category_code, settings=settings)
    if args.command == "identity":
        return run_with_retry(pipeline.identity, args.category_code, settings=settings)
    if args.command == "category":
        return run_with_retry(pipeline.category, args.category_code, settings=settings)
    if args.command == "taxonomy-search":
        return run_with_retry(pipeline.taxonomy_search, args.code, settings=settings)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level, settings=settings, json_output=not args.plain_logs)

    try:
        with build_pipeline(settings) as pipeline:
            result = _dispatch(pipeline, args, settings)
    except EnrichmentError as exc:
        LOGGER.error("cli.failed", command=args.command, kind=exc.kind, error=str(exc))
        print(json.dumps(exc.to_payload(), ensure_ascii=False, indent=args.indent))
        return 2 if isinstance(exc, MissingParameterError) else 1

    print(json.dumps(result, ensure_ascii=False, indent=args.indent))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
