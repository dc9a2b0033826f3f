"""
Expense Tracker

A personal expense-tracking command-line tool: record spending,
get warned when a month goes over budget, summarize and export.

DESIGN PRINCIPLES:
1. The ledger engine is pure; stores do all the I/O
2. Expense ids are always 1..N, renumbered on delete
3. Errors are reported, never fatal
4. Every mutation is audited
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
