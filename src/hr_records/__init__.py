"""HR Records package.

Organized by feature modules (employees, timesheets) with a thin Flask
controller layer on top of service and repository layers.
"""
