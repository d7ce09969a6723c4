"""Typed value codecs.

This package maps each native Redis value shape to and from its JSON
fragment and resolves codecs by the type tag the store reports.
"""
