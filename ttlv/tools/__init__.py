"""Diagnostic tooling for inspecting TTLV data."""
