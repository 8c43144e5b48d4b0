"""Demo and diagnostics CLI for tintgrid."""
