"""Techie Workspace package.

This package is organized by feature modules (sessions, usage, plans, reports, ...)
with a thin Flask controller layer and service/repository layers.
"""
