"""Core configuration and paths for shardcas."""
