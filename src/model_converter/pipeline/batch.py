# ABOUTME: Chunked batch conversion with bounded concurrency
# ABOUTME: Each chunk settles completely before the next one starts

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from ..config import DEFAULT_CONCURRENCY, ConversionOptions
from ..formats import FormatLike
from ..models import BatchItem, BatchResult, ConversionResult

ConvertFn = Callable[..., Awaitable[ConversionResult]]


def chunked(items: List[BatchItem], size: int) -> List[List[BatchItem]]:
    """Split items into consecutive chunks of at most ``size`` entries."""
    if size < 1:
        raise ValueError("Chunk size must be at least 1")
    return [items[i:i + size] for i in range(0, len(items), size)]


async def _convert_item(convert: ConvertFn,
                        item: BatchItem,
                        output_format: FormatLike,
                        options: Optional[ConversionOptions],
                        logger: logging.Logger) -> BatchResult:
    try:
        result = await convert(item.source, item.input_format, output_format, options)
    except Exception as e:
        logger.warning("Batch item %s failed: %s", item.name or '<unnamed>', e)
        return BatchResult(item=item, success=False, error=e)
    return BatchResult(item=item, success=True, result=result)


async def run_batch(convert: ConvertFn,
                    items: List[BatchItem],
                    output_format: FormatLike,
                    options: Optional[ConversionOptions] = None,
                    concurrency: int = DEFAULT_CONCURRENCY,
                    logger: Optional[logging.Logger] = None) -> List[BatchResult]:
    """
    Run conversions chunk by chunk.

    Items inside a chunk run concurrently and may finish in any order; the
    returned list is always in input order. A failing item becomes a
    BatchResult with success=False and never cancels its siblings.

    Args:
        convert: Coroutine function with the ModelConverter.convert signature
        items: Batch entries
        output_format: Target format for every item
        options: Options shared by every item
        concurrency: Chunk size, at least 1
        logger: Logger for progress and failures

    Returns:
        One BatchResult per item, in input order
    """
    logger = logger or logging.getLogger('model_converter')
    items = list(items)
    results: List[Optional[BatchResult]] = [None] * len(items)
    chunks = chunked(items, concurrency)

    offset = 0
    for number, chunk in enumerate(chunks, start=1):
        logger.debug("Batch chunk %d/%d: %d items", number, len(chunks), len(chunk))

        tasks = {
            asyncio.ensure_future(_convert_item(convert, item, output_format, options, logger)): offset + i
            for i, item in enumerate(chunk)
        }

        # collect in completion order, store by input position
        pending = set(tasks)
        try:
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    results[tasks[task]] = task.result()
        except asyncio.CancelledError:
            for task in pending:
                task.cancel()
            raise

        offset += len(chunk)

    failures = sum(1 for r in results if not r.success)
    if failures:
        logger.info("Batch finished: %d succeeded, %d failed", len(results) - failures, failures)
    else:
        logger.debug("Batch finished: %d succeeded", len(results))

    return results
