"""pygame front end: board renderer, human play loop and function visualizer."""
