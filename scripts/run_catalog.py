#!/usr/bin/env python3
"""
Load the furniture catalog and report what was fetched
"""
import sys
import json
import asyncio
import argparse
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.catalog.errors import CatalogError
from src.catalog.pipeline import CatalogPipeline
from src.catalog.presentation import ListItemPresenter, LoadingState
from src.integrations.clients.mocks.local_catalog import LocalCatalogClient
from src.integrations.clients.real_http.catalog_http import CatalogHttpClient
from src.utils.config_loader import load_catalog_config


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler()]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Download the furniture catalog and its product images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Load the published catalog with default config
  python scripts/run_catalog.py

  # Load a different catalog document
  python scripts/run_catalog.py --catalog-url https://example.com/product.json

  # Load from a local folder holding product.json and image files
  python scripts/run_catalog.py --local-dir data/catalog

  # Also wait for every additional product image
  python scripts/run_catalog.py --wait-background --verbose
        """
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Path to catalog config YAML file (default: config/catalog_config.yml)'
    )

    parser.add_argument(
        '--catalog-url',
        type=str,
        default=None,
        help='Catalog document URL (overrides config and CATALOG_URL)'
    )

    parser.add_argument(
        '--local-dir',
        type=Path,
        default=None,
        help='Serve product.json and images from a local directory instead of HTTP'
    )

    parser.add_argument(
        '--one-shot-events',
        action='store_true',
        help='Emit each category-ready and the catalog-ready event at most once'
    )

    parser.add_argument(
        '--wait-background',
        action='store_true',
        help='Wait for the additional (non-thumbnail) images before exiting'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--log-file',
        type=Path,
        default=None,
        help='Path to log file (default: log to console only)'
    )

    return parser


async def run(args, logger: logging.Logger) -> int:
    config = load_catalog_config(args.config)
    if args.catalog_url:
        config.source.catalog_url = args.catalog_url
    if args.one_shot_events:
        config.completion.one_shot_events = True

    logger.info("Catalog Configuration:")
    logger.info(f"  Catalog URL: {config.source.catalog_url}")
    logger.info(f"  Initial categories: {', '.join(config.catalog.initial_categories)}")
    logger.info(f"  One-shot events: {config.completion.one_shot_events}")

    if args.local_dir:
        source = LocalCatalogClient.from_directory(config.source.catalog_url, args.local_dir)
    else:
        source = CatalogHttpClient(
            timeout_seconds=config.source.request_timeout_seconds,
            user_agent=config.source.user_agent,
        )

    loading = LoadingState()
    presenter = ListItemPresenter(
        displayed_categories=config.catalog.initial_categories,
        loading_state=loading,
        thumbnail_box_size=config.presentation.thumbnail_box_size,
    )
    pipeline = CatalogPipeline(source, presenter=presenter, loading_indicator=loading, config=config)

    try:
        catalog = await pipeline.run()
        if args.wait_background:
            logger.info("Waiting for %d background image downloads...", pipeline.pending_background)
            await pipeline.wait_for_background()
    except CatalogError:
        logger.error("Catalog load failed: %s", loading.failure.message if loading.failure else "unknown")
        return 2
    finally:
        await pipeline.cancel_background()
        await source.aclose()

    summary = {
        "catalog_url": config.source.catalog_url,
        "state": pipeline.state,
        "categories": catalog.summary(),
        "counters": pipeline.tracker.snapshot(),
        "rendered": {category: len(items) for category, items in presenter.lists.items()},
        "unparseable_prices": len(pipeline.builder.parse_warnings),
    }
    print(json.dumps(summary, indent=2))
    return 0


def main():
    """Main entry point for the catalog loader"""
    load_dotenv()
    args = build_parser().parse_args()

    setup_logging(verbose=args.verbose, log_file=args.log_file)
    logger = logging.getLogger(__name__)

    try:
        return asyncio.run(run(args, logger))
    except KeyboardInterrupt:
        logger.warning("Catalog load interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Error during catalog load: {type(e).__name__}: {str(e)}", exc_info=args.verbose)
        return 1


if __name__ == "__main__":
    sys.exit(main())
