"""
Shared Kernel

Building blocks reused by the booking and room contexts: value objects and
the unit of work that delimits database transactions.
"""
