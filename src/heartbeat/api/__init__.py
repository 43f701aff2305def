"""Heartbeat HTTP API."""
