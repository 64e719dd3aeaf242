"""Journeys against a live deployment of the transport request wizard."""
