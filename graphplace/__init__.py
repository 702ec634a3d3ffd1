"""Node placement on slots by simulated annealing, with selectors, statistics and layer building blocks."""

__version__ = "0.1.0"