"""Cross-context building blocks: errors, configuration, logging, storage helpers."""
