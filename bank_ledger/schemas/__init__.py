"""Pydantic schemas: the HTTP contract and the backing file format."""
