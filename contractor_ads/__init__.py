"""Contractor Ad API: ad-creation webhooks and lead capture over HTTP/JSON."""

__version__ = "0.1.0"
