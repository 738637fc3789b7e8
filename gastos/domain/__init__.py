"""Domain models and types for gastos.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from gastos.domain.models import Amount, Category, ExpenseRecord

__all__ = ["Amount", "Category", "ExpenseRecord"]
