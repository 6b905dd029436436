# ABOUTME: Package root for the c14 command-line client
# ABOUTME: Exposes the version string shared by the CLI and API client

"""Command-line client for Online C14 cold storage."""

__version__ = "0.1.0"
