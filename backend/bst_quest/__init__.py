"""BST Quest backend: binary search tree insertion game served over FastAPI."""

__version__ = "1.0.0"
