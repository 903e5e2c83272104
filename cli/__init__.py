"""Command line interface for midicarver."""
