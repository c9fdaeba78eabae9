"""Decode quasi-CSV pixel-vector datasets into gallery-ready samples."""
