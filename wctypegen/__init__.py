"""Generate a components.d.ts for the Web Components found in a project."""

__version__ = "0.1.0"
