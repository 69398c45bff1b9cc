#!/usr/bin/env python3
"""Quick live check of the public sources (no API keys needed).

Run:
  poetry run python scripts/live_search.py                    # "python" on remoteok, arbeitnow, himalayas
  poetry run python scripts/live_search.py "web design"       # custom query
  poetry run python scripts/live_search.py "web design" bountyboard Austin   # needs GOOGLE_PLACES_API_KEY
"""

import sys

from bounty_feed.models.record import SearchOptions
from bounty_feed.pipeline import failed_sources, search


def main() -> None:
    query = sys.argv[1] if len(sys.argv) > 1 else "python"
    sources = sys.argv[2].split(",") if len(sys.argv) > 2 else ["remoteok", "arbeitnow", "himalayas"]
    location = sys.argv[3] if len(sys.argv) > 3 else None

    print(f"Searching {query!r} on {', '.join(sources)}...")
    results = search(query, sources, SearchOptions(limit=5, location=location))
    for result in results:
        print(f"\n[{result.source}] success={result.success} records={len(result.records)}")
        for i, record in enumerate(result.records, 1):
            print(f"  {i}. {record.title} ({record.id})")

    failures = failed_sources(results)
    if failures:
        print("\nFailed sources:")
        for source, error in failures.items():
            print(f"  {source}: {error}")
    else:
        print("\nAll sources succeeded.")


if __name__ == "__main__":
    main()
