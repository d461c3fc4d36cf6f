"""Shared enumerations used across the backend."""

from enum import StrEnum


class FlowDirection(StrEnum):
    """Whether a production process consumes or yields a resource."""

    INPUT = "input"
    OUTPUT = "output"
