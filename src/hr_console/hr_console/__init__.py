"""HR console package.

This package is organized by feature modules (attendance, summary, leaves,
payroll, ...) with a thin Flask controller layer and service/repository layers
on top of a document store.
"""
