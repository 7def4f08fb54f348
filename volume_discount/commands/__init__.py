"""
CLI Commands for the volume discount app.

Usage:
    flask discount run --input cart.json       # Evaluate a cart
    flask discount configure --tier 5:10       # Build a configuration
    flask discount inspect --input config.json # Explain a stored configuration
"""
from .discount import discount_cli


def init_app(app):
    """Register all CLI commands with the Flask app."""
    app.cli.add_command(discount_cli)
