"""Serializers turning model instances into JSON:API nodes."""

from .base import JSONAPISerializer

__all__ = ["JSONAPISerializer"]
