"""
Domain layer package.

Contains the error types raised by record-management collaborators.
This layer has ZERO external dependencies.
No framework imports, no IO, no side effects.
"""
