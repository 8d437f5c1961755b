"""
Configuration management for the Photos API.

Contains the Pydantic settings object read once at process start from the
environment and an optional .env file.
"""
