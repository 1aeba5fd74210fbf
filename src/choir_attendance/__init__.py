"""Choir Attendance package.

This package is organized by feature modules (users, events, attendance, ...)
with a thin Flask controller layer over service/repository layers. The
attendance aggregation core (``ledger`` and ``reports``) is pure and works
on an immutable snapshot supplied by the repositories.
"""
