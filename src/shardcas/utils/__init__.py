"""Utility helpers for shardcas."""
