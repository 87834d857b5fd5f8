"""link_scout.crawler: frontier, fetcher pool, workers and the batch dispatcher."""
