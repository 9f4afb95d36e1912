"""Domain layer — account kinds, errors, number allocation, account records.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
