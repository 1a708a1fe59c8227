"""Adapter package for external I/O implementations.

Purpose:
    Concrete implementations of the domain ports: Apex REST transport,
    in-memory test doubles, and local settings storage.

Dependencies:
    ``apex_rest`` and ``http_client`` depend on ``requests``; the rest use the
    standard library only.
"""
