"""
email_extractor/pipeline.py
Batch orchestration: input validation -> dispatch -> reduce -> settled run
"""
import logging
from pathlib import Path
from typing import Sequence, Union

from .errors import InputError
from .extraction.dispatcher import BatchDispatcher, reduce_results
from .extraction.source_parser import load_urls_from_csv
from .schema import BatchRun

logger = logging.getLogger(__name__)


class ExtractionPipeline:
    """
    Entry point for both input modes.

    Input problems raise InputError before any request is made; once a batch
    starts, per-URL failures end up inside the run's result map.
    """

    def __init__(self, dispatcher: BatchDispatcher):
        self.dispatcher = dispatcher

    async def process_url(self, url: str) -> BatchRun:
        """Extract emails for a single URL"""
        url = (url or "").strip()
        if not url:
            raise InputError("Please enter a URL.")

        return await self.run_batch([url], source_name=url)

    async def process_csv(self, csv_path: Union[str, Path]) -> BatchRun:
        """Extract emails for every URL in the first column of a CSV file"""
        urls = load_urls_from_csv(csv_path)
        return await self.run_batch(urls, source_name=Path(csv_path).name)

    async def run_batch(self, urls: Sequence[str], source_name: str) -> BatchRun:
        run = BatchRun(source_name=source_name, urls=list(urls))
        logger.info(f"Starting extraction for {source_name} ({len(run.urls)} URL(s))")

        pairs = await self.dispatcher.dispatch_all(run.urls)
        run.settle(reduce_results(pairs))

        logger.info(
            f"✓ {source_name}: {run.total_emails} email(s) across {len(run.results)} source(s) "
            f"({run.success_count} succeeded, {run.failure_count} failed) in {run.duration_seconds:.2f}s"
        )
        return run
