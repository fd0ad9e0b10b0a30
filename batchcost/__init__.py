"""BatchCost: recipe costing and batch-inventory engine."""

__version__ = "1.0.0"
