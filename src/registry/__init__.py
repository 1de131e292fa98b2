"""Version sources backed by artifact registries."""
