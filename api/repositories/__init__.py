"""
API Repositories - Durable item storage abstraction

Provides a clean interface for item persistence that can be swapped
between local files (current) and another backend without touching
the handlers or the retention sweeper.

Pattern: Repository Pattern
"""
