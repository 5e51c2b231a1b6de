"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, settings, errors, validation helpers). Keep feature-specific
rules in the corresponding feature package (e.g. `characters/`).
"""
