"""
Slash command catalog.
One subpackage per category, one module per command.
"""
