"""HTTP API for the Kgotla application."""
