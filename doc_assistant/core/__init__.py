"""Core business logic: chunking, scoring, retrieval, prompting."""
