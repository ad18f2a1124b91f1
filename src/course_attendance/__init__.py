"""Course attendance package.

Organised by feature modules (courses, sessions, attendance, excuses, ...)
with pure domain logic and service layers written against repository
protocols. Persistence and HTTP wiring belong to the host application.
"""
