"""Trainer Worklog package.

This package is organized by feature modules (users, tasks, reports, ...)
with a thin Flask JSON controller layer over service/repository layers.
"""
