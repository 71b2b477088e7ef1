# Path: core/__init__.py
# Purpose: Package initializer for core application layer.
# Layer: core.
# Details: Aggregates key subpackages for domain models, dataset loading, and relevance aggregation.
