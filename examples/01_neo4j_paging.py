"""Neo4j paging example (optional dependency + running server)."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_ogm").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_ogm import GraphRepository, Neo4jSession, Page, PageRequest, Sort, query


@dataclass
class Movie:
    title: str = ""
    released: int = 0


class MovieRepository(GraphRepository):
    @query("UNWIND range(1, $count) AS i CREATE (:Movie {title: 'Movie ' + i, released: 1990 + i})")
    def seed(self, count: int) -> None: ...

    @query("MATCH (n:Movie) WHERE n.released >= $since RETURN n")
    def released_since(self, since: int, page: PageRequest) -> Page[Movie]: ...

    @query("MATCH (n:Movie) DETACH DELETE n")
    def clear(self) -> None: ...


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    try:
        session = Neo4jSession.from_env()
    except ImportError:
        print("Neo4j example skipped: neo4j driver not installed.")
        print("Install dependency: pip install neo4j")
        return

    with session:
        movies = MovieRepository(session)
        movies.clear()
        movies.seed(23)

        request = PageRequest(0, 5, Sort.by("released", direction="DESC"))
        while True:
            page = movies.released_since(1990, request)
            print(
                f"page={page.number} items={page.number_of_elements} "
                f"estimated_total={page.total} has_next={page.has_next}"
            )
            if not page.has_next:
                break
            request = page.next_pageable()

        movies.clear()


if __name__ == "__main__":
    main()
