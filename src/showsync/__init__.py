"""Showtime ingestion, reconciliation and query service."""
