"""Attendance Tracker package.

Feature modules (attendance, database, ...) with a thin Flask controller
layer on top of service/repository layers.
"""
