import sys
import time
import logging
import asyncio
import argparse
import csv
from typing import List, Optional, Tuple

from config import ScraperSettings
from models.base_scraper import BaseScraper
from models.errors import ScraperError
from models.models import ProductRecord
from scrapers.conrad.conrad_scraper import ConradScraper

# -----------------------------------------------------------------------------
# Logging configuration
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

logger = logging.getLogger("article-scout")


# -----------------------------------------------------------------------------
# Helper functions for CSV batch processing
# -----------------------------------------------------------------------------
def read_article_ids_from_csv(csv_path: str) -> List[str]:
    """Read article ids from CSV file. Supports 'id' or 'article_id' column."""
    article_ids = []
    with open(csv_path, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)

        id_column = None
        if 'id' in reader.fieldnames:
            id_column = 'id'
        elif 'article_id' in reader.fieldnames:
            id_column = 'article_id'
        else:
            raise ValueError("CSV file must contain 'id' or 'article_id' column")

        for row in reader:
            if row.get(id_column, '').strip():
                article_ids.append(row[id_column].strip())
    return article_ids


async def batch_scrape_articles(article_ids: List[str], scraper: BaseScraper, limit: int = 5):
    """Batch scrape multiple article ids concurrently with a semaphore limit."""

    semaphore = asyncio.Semaphore(limit)

    async def bounded_scrape(index, article_id):
        async with semaphore:
            logger.info("Processing %d/%d: %s", index, len(article_ids), article_id)
            try:
                return article_id, await scraper.scrape(article_id)
            except ScraperError as e:
                logger.error("%s failed for %s: %s", scraper.get_distributor_name(), article_id, e)
                return article_id, None

    tasks = [bounded_scrape(i, article_id) for i, article_id in enumerate(article_ids, 1)]
    return await asyncio.gather(*tasks)


def write_results_to_jsonl(results: List[Tuple[str, Optional[ProductRecord]]], output_path: str):
    """Write found records to a JSON Lines file, one record per line."""
    records = [record for _, record in results if record]
    if not records:
        logger.warning("No results to write")
        return

    with open(output_path, 'w', encoding='utf-8') as f:
        for record in records:
            f.write(record.model_dump_json())
            f.write("\n")

    logger.info("%d records written to %s", len(records), output_path)


# -----------------------------------------------------------------------------
# Main entry point
# -----------------------------------------------------------------------------
async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with argument parsing and routing."""

    start = time.perf_counter()

    parser = argparse.ArgumentParser(
        description="Vendor Article Lookup Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
        Examples:
        python main.py --id 123456
        python main.py --csv input.csv --output results.jsonl
        """
    )

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--id", dest="article_id", help="Vendor article number")
    group.add_argument("--csv", help="Path to CSV file containing article ids (must have 'id' or 'article_id' column)")

    parser.add_argument("--output", help="Output JSON Lines file path (only used with --csv)")
    parser.add_argument("--concurrency", type=int, default=5, help="Parallel lookups in CSV mode")

    args = parser.parse_args(argv)

    scraper = ConradScraper.from_settings(ScraperSettings.from_env())

    if args.article_id is not None:
        try:
            record = await scraper.scrape(args.article_id)
        except ScraperError as e:
            logger.error("%s lookup failed: %s", scraper.get_distributor_name(), e)
            return 1

        if record is None:
            logger.warning("No %s article found for %s", scraper.get_distributor_name(), args.article_id)
            return 0

        print(record.model_dump_json(indent=2))
        elapsed = time.perf_counter() - start
        logger.info("Lookup completed in %.2f seconds", elapsed)
        return 0

    output_path = args.output or 'results.jsonl'

    logger.info("Reading article ids from %s", args.csv)
    article_ids = read_article_ids_from_csv(args.csv)
    logger.info("Found %d article ids to process", len(article_ids))

    results = await batch_scrape_articles(article_ids, scraper, limit=args.concurrency)
    write_results_to_jsonl(results, output_path)

    found = sum(1 for _, record in results if record)
    elapsed = time.perf_counter() - start
    logger.info("Batch processing completed in %.2f seconds: %d/%d found", elapsed, found, len(results))
    return 0


# -----------------------------------------------------------------------------
# Entrypoint
# -----------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
