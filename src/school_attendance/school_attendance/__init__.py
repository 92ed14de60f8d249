"""School attendance kiosk package.

Feature modules (schedules, settings, students, attendance) each carry a
model, a repository interface with MySQL and in-memory backends, a service
and a thin Flask controller.
"""
