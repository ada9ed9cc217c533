from .demo import (  # noqa: F401
    build_configuration,
    fetch_books_by_author,
    run_demo,
    seed_sample_data,
)

__all__ = [
    "build_configuration",
    "seed_sample_data",
    "run_demo",
    "fetch_books_by_author",
]
