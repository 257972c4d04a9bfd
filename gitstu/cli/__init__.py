"""Command line interface for gitstu."""
