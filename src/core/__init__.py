"""
Core domain models, amount arithmetic, and the error taxonomy.

This module contains the foundational building blocks shared by the
asserter (validation engine) and the parser (operation pattern matcher).
"""
