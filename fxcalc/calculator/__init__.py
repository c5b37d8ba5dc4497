"""Expression accumulator, synchronization engine, history and deal journal."""
