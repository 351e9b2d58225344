"""Shared gateways and utilities for gg."""
