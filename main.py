"""
main.py
Command-line entry point: extract likely email addresses for a URL or a CSV of URLs
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

# Configuration
from email_extractor.config import get_config

# Core components
from email_extractor.clients.gemini_client import GeminiClient
from email_extractor.errors import ConfigurationError, InputError
from email_extractor.extraction.dispatcher import BatchDispatcher
from email_extractor.pipeline import ExtractionPipeline
from email_extractor.presentation import format_results, results_to_json


# Setup logging
def setup_logging(config, verbose: bool = False):
    """Setup logging configuration"""
    log_config = {
        'level': logging.DEBUG if verbose else logging.INFO,
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    }

    if config is not None and config.paths.log_file:
        log_config['filename'] = config.paths.log_file

    logging.basicConfig(**log_config)

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Ask Gemini for the email addresses likely published on a website."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="Single website URL to analyze")
    source.add_argument("--csv", dest="csv_path", help="CSV file whose first column holds URLs")
    parser.add_argument(
        "--contact-links",
        action="store_true",
        help="Print an outreach mailto: link next to every address"
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def initialize_pipeline(config) -> ExtractionPipeline:
    """Wire configuration into client, dispatcher and pipeline"""
    logger.info("Initializing extraction components...")

    gemini_client = GeminiClient.from_config(config.gemini)
    dispatcher = BatchDispatcher(gemini_client)

    return ExtractionPipeline(dispatcher)


async def run(args: argparse.Namespace, pipeline: ExtractionPipeline) -> int:
    if args.url is not None:
        batch_run = await pipeline.process_url(args.url)
    else:
        batch_run = await pipeline.process_csv(args.csv_path)

    if args.json:
        print(results_to_json(batch_run))
    else:
        print(format_results(batch_run, include_contact_links=args.contact_links))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = get_config()
    except ConfigurationError as e:
        setup_logging(None, args.verbose)
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    setup_logging(config, args.verbose)
    if args.verbose:
        config.print_summary()

    try:
        pipeline = initialize_pipeline(config)
        return asyncio.run(run(args, pipeline))

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    except InputError as e:
        logger.error(f"Input error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
