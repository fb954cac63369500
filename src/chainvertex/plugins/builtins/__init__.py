"""Built-in plugins shipped with chainvertex."""
