"""Campus Attendance package.

Organized by feature modules (sessions, attendance, geo, storage, ...)
with a thin Flask controller layer over service/gateway layers.
"""
