"""Tree-walking evaluation of Flint programs."""
