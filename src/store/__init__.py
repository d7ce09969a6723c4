"""Collaborators at the edge of the pipelines.

This package opens the Redis connection, reads and writes snapshot
documents, and uploads exported documents to object storage.
"""
