"""Command-line wrapper around `render_template`."""
