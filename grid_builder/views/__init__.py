"""HTML views for the grid builder.

Renders the builder page and the HTMX fragments (grid, save dialog, states)
that the view router returns.
"""
