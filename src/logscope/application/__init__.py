"""Application layer – record store port, search, analytics and export."""
