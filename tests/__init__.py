"""
ReadShelf Client Test Suite

Tests are organized into:
- unit/: Unit tests for individual components
- integration/: The live client against a fake catalog backend, and
  full auth + resource flows through the container
"""
