"""Domain initialization and configuration."""

from protean.domain import Domain

# Domain Composition Root
catalogue = Domain(name="catalogue")
