"""Core of protodoc: document model, configuration and rendering."""
