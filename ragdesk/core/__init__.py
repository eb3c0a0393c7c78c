"""Core domain logic: chunking, embedding, ingestion and retrieval."""
