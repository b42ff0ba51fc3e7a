"""HR dashboard package.

Organized by feature modules (attendance, profiles, ...) with a thin Flask
controller layer over service/repository layers. The scheduled attendance
auto clock-out job lives in ``attendance.auto_clockout``.
"""
