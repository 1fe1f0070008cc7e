"""Adapters for the systems cave talks to.

Modules
-------
docker
    The ``docker`` CLI: installed tags, pull, run, image IDs.
registry
    Docker Hub's paginated tag listing.
telemetry
    Fire-and-forget execution reports.
"""
