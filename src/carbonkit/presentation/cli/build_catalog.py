"""Command-line interface for describing every template across a size range."""

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from tqdm import tqdm

from ...config import configure_logging
from ...core.services.notation_service import NotationService
from ...infrastructure.templates import (
    TEMPLATE_CATALOG,
    TemplateMetadata,
    TemplateParams,
    create_template,
)
from .describe_molecule import describe


def catalog_jobs(
    min_size: int, max_size: int, catalog: Optional[List[TemplateMetadata]] = None
) -> List[Tuple[TemplateMetadata, TemplateParams]]:
    """
    Expand the template catalog into (template, params) jobs.

    Sized templates get one job per size within both the requested and the
    template's allowed range; fixed templates get a single job.
    """
    jobs = []
    for meta in catalog or TEMPLATE_CATALOG:
        size_range = meta.chain_length or meta.ring_size
        if size_range is None:
            jobs.append((meta, meta.default_params))
            continue
        low = max(min_size, size_range.minimum)
        high = min(max_size, size_range.maximum)
        for size in range(low, high + 1):
            if meta.chain_length is not None:
                jobs.append((meta, TemplateParams(chain_length=size)))
            else:
                jobs.append((meta, TemplateParams(ring_size=size)))
    return jobs


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Describe all templates over a range of sizes"
    )
    parser.add_argument("output", help="Path of the JSON file to write")
    parser.add_argument("--min-size", type=int, default=1, help="Smallest size")
    parser.add_argument("--max-size", type=int, default=8, help="Largest size")
    parser.add_argument("--log-file", help="Optional log file path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the catalog CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)
    if args.min_size > args.max_size:
        parser.error("--min-size must not exceed --max-size")

    logger = configure_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )

    notation = NotationService(logger=logger)
    jobs = catalog_jobs(args.min_size, args.max_size)
    entries: List[Dict[str, Any]] = []
    invalid = 0

    for meta, params in tqdm(jobs, desc="Describing templates"):
        graph = create_template(meta.template_type, params)
        report = describe(graph, notation)
        if not report["valid"]:
            invalid += 1
            logger.warning(f"{meta.name} {params} is invalid: {report['errors']}")
        entries.append(
            {
                "template": meta.template_type.value,
                "chain_length": params.chain_length,
                "ring_size": params.ring_size,
                **report,
            }
        )

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(entries, f, indent=2, ensure_ascii=False)

    logger.info(f"Wrote {len(entries)} entries to {output} ({invalid} invalid)")
    return 0 if invalid == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
