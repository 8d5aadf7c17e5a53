"""School attendance package.

Organized by feature modules (users, academics, students, attendance,
reports, ...) with a thin Flask controller layer over service/repository
layers.
"""
