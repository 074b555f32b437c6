"""HR workflow package.

This package is organized by feature modules (requests, attendance, payroll, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
