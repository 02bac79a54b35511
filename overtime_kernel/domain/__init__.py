"""Pure domain layer: value objects and rule functions. Zero I/O."""
