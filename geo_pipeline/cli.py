import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterator

from geo_pipeline.config import ResolverConfig
from geo_pipeline.resolver import LocationResolver
from geo_pipeline.types import ExtractionContext

logger = logging.getLogger(__name__)


def iter_contexts(path: str) -> Iterator[Dict]:
    with Path(path).open(encoding="utf-8") as f:
        for line in f:
            if line.strip():
                yield json.loads(line)


def main():
    parser = argparse.ArgumentParser(description="Resolve extracted locations and coordinates.")
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to resolver config JSON file.",
    )
    parser.add_argument(
        "--input",
        type=str,
        nargs="+",
        required=True,
        help="JSONL files with one extraction context per line.",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Optional JSONL output path (defaults to stdout).",
    )
    parser.add_argument(
        "--log",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level",
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log)

    config_data = json.loads(Path(args.config).read_text(encoding="utf-8"))
    config = ResolverConfig.from_dict(config_data)
    resolver = LocationResolver.from_config(config)

    writer = Path(args.output).open("w", encoding="utf-8") if args.output else sys.stdout
    count = 0
    try:
        for path in args.input:
            for item in iter_contexts(path):
                context = ExtractionContext.from_dict(item)
                resolution = resolver.resolve_locations(context)
                writer.write(json.dumps({"id": item.get("id"), **resolution.to_dict()}) + "\n")
                count += 1
    finally:
        if writer is not sys.stdout:
            writer.close()
    logger.info(f"Resolved {count} extraction contexts")


if __name__ == "__main__":
    main()
