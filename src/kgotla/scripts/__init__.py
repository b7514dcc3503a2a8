"""Operational scripts for the Kgotla application."""
