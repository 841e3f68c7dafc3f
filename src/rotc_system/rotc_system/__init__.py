"""ROTC core package.

Organized by feature modules (geo, sessions, attendance, grades, ...) with a
thin Flask controller layer over service/repository layers.
"""
