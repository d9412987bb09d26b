"""Citation processing core: macros, styles, ordering and rendering."""
