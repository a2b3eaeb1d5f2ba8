"""shardcas command-line interface."""
