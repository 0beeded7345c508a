"""
Shared error handling package.

Centralizes failure classification and error-to-HTTP mapping so that
every unhandled failure is rendered as one stable error envelope.
"""
