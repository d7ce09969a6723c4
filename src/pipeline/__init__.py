"""Snapshot export and import pipelines.

This package drives the value codecs over a whole keyspace, isolating
per-key failures and reporting one summary per run.
"""
