"""Demo data generators."""

from segabank.generators.demo import DemoDataGenerator

__all__ = ["DemoDataGenerator"]
