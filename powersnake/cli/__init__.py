"""Command line entry points for powersnake."""
