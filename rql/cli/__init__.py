"""Command line front end for rql (``rql`` console script)."""

from __future__ import annotations
