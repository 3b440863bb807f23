# email_extractor/extraction/dispatcher.py
import asyncio
import logging
import time
from typing import Iterable, List, Sequence, Tuple

from ..clients.base_client import BaseLLMClient, UNKNOWN_SERVICE_ERROR
from ..schema import ExtractionFailure, ExtractionOutcome, ExtractionSuccess, ResultMap

logger = logging.getLogger(__name__)


class BatchDispatcher:
    """
    Fans out one extraction per URL and waits for all of them to settle.

    Every call is started before any is awaited, and a failing call is
    recorded as an ExtractionFailure instead of cancelling its siblings.
    There is no concurrency cap: N URLs means N in-flight requests.
    """

    def __init__(self, client: BaseLLMClient):
        self.client = client
        logger.info(f"BatchDispatcher initialized with {client.__class__.__name__}")

    async def dispatch_all(self, urls: Sequence[str]) -> List[Tuple[str, ExtractionOutcome]]:
        """
        Extract emails for every URL concurrently

        Args:
            urls: URLs in submission order (duplicates allowed)

        Returns:
            (url, outcome) pairs, same length and order as `urls`
        """
        if not urls:
            return []

        logger.info(f"Dispatching batch of {len(urls)} URL(s)...")
        start_time = time.time()

        tasks = [self.client.extract_emails(url) for url in urls]

        # Gather results, catching exceptions
        results = await asyncio.gather(*tasks, return_exceptions=True)

        outcomes = []
        for url, result in zip(urls, results):
            if isinstance(result, Exception):
                logger.warning(f"Extraction failed for {url}: {result}")
                outcomes.append((url, ExtractionFailure(message=str(result) or UNKNOWN_SERVICE_ERROR)))
            elif isinstance(result, BaseException):
                raise result
            else:
                outcomes.append((url, ExtractionSuccess(emails=list(result))))

        duration = time.time() - start_time
        success_count = sum(1 for _, o in outcomes if isinstance(o, ExtractionSuccess))
        logger.info(f"✓ Batch completed: {success_count}/{len(urls)} successful in {duration:.2f}s")

        return outcomes


def reduce_results(pairs: Iterable[Tuple[str, ExtractionOutcome]]) -> ResultMap:
    """Key outcomes by URL; when a URL repeats, the last outcome wins"""
    results: ResultMap = {}
    for url, outcome in pairs:
        results[url] = outcome
    return results
