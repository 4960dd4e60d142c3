"""Infrastructure: adapters, in-memory stubs and observability."""
