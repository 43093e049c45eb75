"""Core utilities and shared infrastructure.

- config: Configuration loading, validation, and share resolution
- constants: Upstream endpoint, error codes, blob path prefixes
- exceptions: Custom exception hierarchy
- ingress: Blob service client factory
"""
