"""Lesson Tracker admin front end.

This package is organized by feature modules (attendance, students, classes)
with a thin Flask controller layer over services and API-backed repositories.
All persistent state lives behind the remote REST API.
"""
