"""Core functionality for the Hue CLIP client.

This package contains:
- client: Client, new_client and new_insecure_client
- request: Request builder and URL resolution
- response: Response envelope and APIError
- errors: Exception hierarchy
- config: Bridge host and application key loading
"""
