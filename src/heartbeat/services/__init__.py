"""Heartbeat services layer."""
