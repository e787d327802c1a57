"""School portal backend.

Feature modules (academics, students, enrollments, attendance, reports,
insurance) each carry a model, a repository protocol with its MySQL
implementation, a service holding the business rules and a thin Flask
controller.
"""
