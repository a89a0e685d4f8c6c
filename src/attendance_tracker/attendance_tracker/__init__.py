"""Attendance Tracker package.

Feature modules (shifts, attendance, absence, users) each keep a plain
domain model, a repository interface with its MySQL implementation, a
service holding the business rules and a thin Flask controller.
"""
