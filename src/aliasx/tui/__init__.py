"""Interactive incremental-search pickers."""
