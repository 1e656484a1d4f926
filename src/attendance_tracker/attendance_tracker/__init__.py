"""Attendance Tracker package.

This package is organized by feature modules (admins, employees, faces, attendance,
dashboard, reports) with a thin Flask controller layer and service/repository layers.
"""
