"""Task dependency backend for the research notebook."""
