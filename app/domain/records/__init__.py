"""
Records bounded context — domain layer.

Resource CRUD (students, teachers, courses, classes, payments, plans,
terms, events, assignments, quizzes) lives in collaborating services.
This package only holds the errors those services raise so that the
shared error boundary can classify them.
"""
